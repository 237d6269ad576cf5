"""
AquaGuard Backend — Abstract Assessment Service Interface
===========================================================

What:  Abstract base class defining the contract for AI leak assessments.
Why:   Routes depend on this interface, so a different provider (or a test
       double) can be swapped in through FastAPI's dependency overrides.
How:   Concrete implementations inherit from AssessmentService and implement
       assess() and health_check().
"""

from abc import ABC, abstractmethod

from app.schemas.assessment import SensorReading


class AssessmentService(ABC):
    """
    Abstract interface for natural-language leak risk assessments.

    Contract:
        - assess() never raises because of the provider: failures become
          a fixed fallback string
        - No retries, no streaming; one request per call
    """

    @abstractmethod
    async def assess(self, reading: SensorReading) -> str:
        """
        Produce an assessment for one set of sensor readings.

        Args:
            reading: Location name plus humidity, water presence and temperature.

        Returns:
            str: The generated text, or a fallback string on empty output or
                 on any provider failure. Never None.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the provider is reachable.

        Returns: True if service is reachable, False otherwise.
        """
        ...
