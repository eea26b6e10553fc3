"""
YOLO cat detector

Image service backed by a pretrained COCO model (class "cat").
Accepts a file path, an ndarray frame or encoded image bytes.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, List

from ..common.errors import ErrorCode, ImageServiceError
from ..common.logging import get_logger
from ..services.image_service import ImageService

# Ultralytics YOLO
try:
    from ultralytics import YOLO
    HAS_YOLO = True
except ImportError:
    HAS_YOLO = False


logger = get_logger("yolo")

CAT_CLASS_NAME = "cat"


@dataclass
class Detection:
    """Single detection."""
    class_id: int
    class_name: str
    confidence: float   # 0.0-1.0


class YoloImageService(ImageService):
    """
    Cat classifier using YOLO.

    The incoming threshold is on a 0-100 scale and is compared against
    YOLO confidences (0.0-1.0) after dividing by 100.
    """

    def __init__(
        self,
        model_name: str = "yolo11n.pt",
        device: str = "cpu",
    ):
        if not HAS_YOLO:
            raise ImageServiceError(
                ErrorCode.IMAGE_SERVICE_UNAVAILABLE,
                "ultralytics not installed. Install: pip install 'catpoint[vision]'",
                model_name=model_name,
            )

        self.model_name = model_name
        self.device = device

        logger.info(f"Loading model: {model_name} (device={device})")
        try:
            self.model = YOLO(model_name)
        except Exception as e:
            raise ImageServiceError(
                ErrorCode.IMAGE_SERVICE_UNAVAILABLE,
                f"Failed to load model: {e}",
                model_name=model_name,
            ) from e

        if device == "cuda":
            self.model.to("cuda")

        self.class_names = self.model.names  # {0: 'person', 15: 'cat', ...}
        self.cat_class_ids = [
            class_id for class_id, name in self.class_names.items()
            if name == CAT_CLASS_NAME
        ]

        # Stats
        self.frame_count = 0
        self.cat_count = 0
        self.total_inference_time = 0.0

    def detect(self, image: Any, min_confidence: float) -> List[Detection]:
        """Run inference and return cat detections above ``min_confidence`` (0-1)."""
        source = _decode_image(image) if isinstance(image, (bytes, bytearray)) else image

        start_time = time.time()
        try:
            results = self.model(
                source,
                conf=min_confidence,
                classes=self.cat_class_ids,
                device=self.device,
                verbose=False,
            )
        except Exception as e:
            raise ImageServiceError(
                ErrorCode.IMAGE_ANALYSIS_FAILED,
                f"Inference failed: {e}",
                model_name=self.model_name,
            ) from e
        self.total_inference_time += time.time() - start_time
        self.frame_count += 1

        detections = []
        for result in results:
            boxes = result.boxes
            for i in range(len(boxes)):
                class_id = int(boxes.cls[i])
                confidence = float(boxes.conf[i])
                class_name = self.class_names[class_id]
                if class_name != CAT_CLASS_NAME or confidence < min_confidence:
                    continue
                detections.append(Detection(class_id, class_name, confidence))

        return detections

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        detections = self.detect(image, confidence_threshold / 100.0)
        if detections:
            self.cat_count += 1
            best = max(det.confidence for det in detections)
            logger.info(f"Cat detected (confidence={best:.2f})")
            return True
        logger.debug("No cat in image")
        return False

    def get_stats(self) -> Dict:
        return {
            "model_name": self.model_name,
            "frame_count": self.frame_count,
            "cat_count": self.cat_count,
            "avg_inference_time": (
                self.total_inference_time / self.frame_count if self.frame_count > 0 else 0
            ),
        }


def _decode_image(data: bytes) -> Any:
    """Decode encoded image bytes (jpeg/png) into a BGR frame."""
    import cv2
    import numpy as np

    frame = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)
    if frame is None:
        raise ImageServiceError(
            ErrorCode.IMAGE_INVALID,
            "Could not decode image bytes",
            details={"size": len(data)},
        )
    return frame
