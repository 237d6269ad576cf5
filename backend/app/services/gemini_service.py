"""
AquaGuard Backend — Google Gemini Assessment Service
======================================================

What:  Concrete assessment service using the Google Gemini API.
Why:   Turns raw sensor numbers into advice a property owner can act on.
How:   Builds a deterministic prompt from the readings, sends it with a fixed
       system instruction, and returns the generated text.
Who:   Built by the app lifespan from the app's Settings; used by the assessment routes.

Failure Strategy:
    One attempt per call. Any exception (network, auth, quota, missing key)
    is logged and replaced by ERROR_FALLBACK; an empty response, including
    one with no text parts (blocked), is replaced by EMPTY_FALLBACK. Callers cannot tell a failure from a real answer by
    status code.
"""

import logging
import time
import uuid

import google.generativeai as genai
from fastapi import Request

from app.config import Settings, settings as default_settings
from app.exceptions import LLMServiceError
from app.schemas.assessment import SensorReading
from app.services.llm_base import AssessmentService

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are an expert water damage mitigation assistant. "
    "Provide concise, actionable advice for property owners."
)

EMPTY_FALLBACK = "Unable to generate assessment at this time."
ERROR_FALLBACK = "Error connecting to AI intelligence service."


def build_prompt(reading: SensorReading) -> str:
    """Render the readings into the assessment prompt. Pure function."""
    water = "YES" if reading.water_presence else "NO"
    return (
        "Analyze the following water sensor data for a property location:\n"
        f"Location: {reading.location_name}\n"
        f"Humidity: {reading.humidity}%\n"
        f"Water Detected: {water}\n"
        f"Temperature: {reading.temperature}°C\n"
        "\n"
        "Provide a concise assessment of the situation.\n"
        "If a leak is detected (Water Detected is YES), provide a prioritized, "
        "location-specific emergency checklist.\n"
        "If no leak is detected but humidity is high (>65%), provide preventative advice.\n"
        "Keep the tone professional and urgent if necessary."
    )


class GeminiService(AssessmentService):
    """
    Google Gemini implementation of AssessmentService.

    Architecture:
        - One instance per app, created in the lifespan
        - Configures the Gemini SDK with the API key once
        - The system instruction is bound to the model object
    """

    def __init__(self, app_settings: Settings = default_settings):
        self.settings = app_settings
        self.configured = bool(
            app_settings.gemini_api_key
            and app_settings.gemini_api_key != "your_gemini_api_key_here"
        )
        if self.configured:
            genai.configure(api_key=app_settings.gemini_api_key)

        self.model = genai.GenerativeModel(
            app_settings.gemini_model,
            system_instruction=SYSTEM_INSTRUCTION,
        )

        logger.info(
            "GeminiService initialized with model=%s (api key %s)",
            app_settings.gemini_model,
            "set" if self.configured else "missing",
        )

    async def assess(self, reading: SensorReading) -> str:
        """
        Generate an assessment, falling back to fixed text on failure.

        Flow:
            1. Build the prompt
            2. One generate_content_async call
            3. Empty text → EMPTY_FALLBACK; any exception → ERROR_FALLBACK
        """
        request_id = str(uuid.uuid4())[:8]
        logger.info(
            "[%s] Requesting assessment for location=%r water=%s",
            request_id,
            reading.location_name,
            reading.water_presence,
        )

        try:
            text = await self._generate(build_prompt(reading), request_id)
        except Exception as e:
            logger.error(
                "[%s] Gemini API error (%s): %s",
                request_id,
                type(e).__name__,
                str(e),
            )
            return ERROR_FALLBACK

        return text or EMPTY_FALLBACK

    async def _generate(self, prompt: str, request_id: str) -> str:
        """Make the actual API call. Raises on any failure."""
        if not self.configured:
            raise LLMServiceError(
                message="GEMINI_API_KEY is not configured",
                context={"request_id": request_id},
            )

        start_time = time.time()
        response = await self.model.generate_content_async(prompt)
        duration_ms = (time.time() - start_time) * 1000

        try:
            raw_text = response.text
        except ValueError:
            # No text parts, e.g. a candidate blocked for safety
            logger.warning("[%s] Gemini returned no text parts", request_id)
            raw_text = ""

        text = raw_text.strip() if raw_text else ""
        logger.info(
            "[%s] Gemini assessment completed in %.0fms, %d chars",
            request_id,
            duration_ms,
            len(text),
        )
        return text

    async def health_check(self) -> bool:
        """
        Check if the Gemini API is reachable.

        How:     Lists available models (no token cost).
        Returns: False when no key is configured or the call fails.
        """
        if not self.configured:
            return False
        try:
            models = genai.list_models()
            model_names = [m.name for m in models]
            target = f"models/{self.settings.gemini_model}"
            if target not in model_names:
                logger.warning("Configured model %s not found in available models", target)
            return True
        except Exception as e:
            logger.warning("Gemini health check failed: %s", str(e))
            return False


def get_assessment_service(request: Request) -> AssessmentService:
    """
    FastAPI dependency returning the service the lifespan stored on
    app.state.assessment_service. Tests replace it through dependency_overrides.
    """
    return request.app.state.assessment_service
