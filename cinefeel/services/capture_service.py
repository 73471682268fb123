import logging
from typing import Dict, Optional

import cv2
import numpy as np

from cinefeel.core.config import settings
from cinefeel.core.exceptions import CaptureUnavailableError
from cinefeel.utils.image import encode_data_uri

logger = logging.getLogger(__name__)

JPEG_QUALITY = 90


def encode_frame(frame: np.ndarray, jpeg_quality: int = JPEG_QUALITY) -> str:
    """Encodes a BGR frame as a data:image/jpeg;base64 payload."""
    if frame is None or frame.size == 0:
        raise CaptureUnavailableError("Frame is empty.")
    ok, buffer = cv2.imencode(".jpg", frame, [int(cv2.IMWRITE_JPEG_QUALITY), jpeg_quality])
    if not ok:
        raise CaptureUnavailableError("Frame could not be encoded as JPEG.")
    return encode_data_uri(buffer.tobytes(), "image/jpeg")


class CaptureClient:
    """
    Owns one camera stream and turns the current frame into an image payload
    (a JPEG data URI) for the emotion flow.
    """

    def __init__(self, camera_index: Optional[int] = None, jpeg_quality: int = JPEG_QUALITY):
        self.camera_index = settings.CAMERA_INDEX if camera_index is None else camera_index
        self.jpeg_quality = jpeg_quality
        self._capture = None

    @property
    def is_available(self) -> bool:
        return self._capture is not None and self._capture.isOpened()

    def open(self) -> bool:
        """Opens the camera. A missing or denied camera is reported, not raised."""
        if self.is_available:
            return True

        capture = cv2.VideoCapture(self.camera_index)
        if not capture.isOpened():
            logger.warning("Camera %s could not be opened.", self.camera_index)
            capture.release()
            return False

        self._capture = capture
        logger.info("Camera %s opened.", self.camera_index)
        return True

    def read_frame(self) -> np.ndarray:
        """Returns the current BGR frame."""
        if not self.is_available:
            raise CaptureUnavailableError("Webcam feed not available.")

        ret, frame = self._capture.read()
        if not ret or frame is None:
            raise CaptureUnavailableError(f"Camera {self.camera_index} returned no frame.")
        return frame

    def encode_frame(self, frame: np.ndarray) -> str:
        return encode_frame(frame, self.jpeg_quality)

    def capture_frame(self) -> str:
        """Grabs the current frame and returns it as a data:image/jpeg;base64 payload."""
        return self.encode_frame(self.read_frame())

    def release(self):
        if self._capture is not None:
            self._capture.release()
            self._capture = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()


def probe_cameras(max_index: int = 5) -> Dict[int, Optional[str]]:
    """
    Scans the first camera indices.
    Maps each index to its resolution ("640x480") when it delivers frames,
    "no-frames" when it opens but stays dark, and None when there is no device.
    """
    found: Dict[int, Optional[str]] = {}
    for index in range(max_index):
        cap = cv2.VideoCapture(index)
        if cap.isOpened():
            ret, frame = cap.read()
            if ret and frame is not None:
                found[index] = f"{frame.shape[1]}x{frame.shape[0]}"
            else:
                found[index] = "no-frames"
        else:
            found[index] = None
        cap.release()
    return found
