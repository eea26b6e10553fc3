"""Catpoint hardware integrations"""

from .yolo_detector import YoloImageService, Detection, HAS_YOLO

__all__ = [
    'YoloImageService',
    'Detection',
    'HAS_YOLO',
]
