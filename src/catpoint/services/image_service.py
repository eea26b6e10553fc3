"""
Image Service - cat classification for camera images

- ImageService: abstract classifier contract
- FakeImageService: random answer, for demos without a model
"""

import random
from abc import ABC, abstractmethod
from typing import Any, Optional


DEFAULT_CONFIDENCE_THRESHOLD = 50.0


class ImageService(ABC):
    """Decides whether an image contains a cat."""

    @abstractmethod
    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        """
        Args:
            image: Image payload (bytes, ndarray or path, backend specific)
            confidence_threshold: Minimum confidence on a 0-100 scale

        Returns:
            True if a cat was found with at least that confidence
        """
        pass


class FakeImageService(ImageService):
    """Returns a random answer, ignoring the image."""

    def __init__(self, seed: Optional[int] = None):
        self._random = random.Random(seed)

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        return self._random.random() < 0.5
