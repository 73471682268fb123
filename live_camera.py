import logging
import threading

import cv2

from cinefeel.controller import SessionController
from cinefeel.core.config import settings
from cinefeel.core.exceptions import CaptureUnavailableError
from cinefeel.services.capture_service import CaptureClient

logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

WINDOW_NAME = "CineFeel LIVE"
MOOD_STEP = 25

COLORS = {
    "Happy": (0, 255, 255), "Sad": (255, 0, 0),
    "Angry": (0, 0, 255), "Surprised": (0, 165, 255),
    "Fearful": (255, 0, 255), "Disgusted": (0, 128, 0),
    "Neutral": (200, 200, 200), "Excited": (255, 255, 0)
}

is_busy = False


def run_in_background(action, *args):
    """Runs a flow without freezing the preview; one flow at a time."""
    global is_busy
    if is_busy:
        return
    is_busy = True

    def _target():
        global is_busy
        try:
            action(*args)
        finally:
            is_busy = False

    threading.Thread(target=_target, daemon=True).start()


def put_outlined_text(frame, text, origin, color, scale=0.6):
    cv2.putText(frame, text, origin, cv2.FONT_HERSHEY_SIMPLEX, scale, (0, 0, 0), 4)
    cv2.putText(frame, text, origin, cv2.FONT_HERSHEY_SIMPLEX, scale, color, 2)


def draw_ui(frame, controller: SessionController):
    emotion = controller.emotion.value
    color = COLORS.get(emotion, (0, 255, 0))

    put_outlined_text(frame, emotion.upper(), (20, 40), color, scale=1.2)
    put_outlined_text(frame, f"{controller.language} / {controller.genre}  mood: {controller.mood_value}",
                      (20, 75), (255, 255, 255))
    if is_busy:
        put_outlined_text(frame, "Working...", (20, 105), (0, 255, 255))

    y = 140
    for movie in controller.recommendations or []:
        put_outlined_text(frame, f"- {movie.title} ({movie.genre})", (20, y), (255, 255, 255))
        y += 28

    if controller.notifications:
        last = controller.notifications[-1]
        put_outlined_text(frame, f"{last.title}: {last.description}", (20, frame.shape[0] - 20), (0, 0, 255), 0.5)

    put_outlined_text(frame, "[e] emotion  [r] recommend  [m/n] mood  [q] quit",
                      (20, frame.shape[0] - 50), (180, 180, 180), 0.5)


def start_camera():
    print(f"🎥 Starting camera (ID: {settings.CAMERA_INDEX})...")
    capture = CaptureClient()
    controller = SessionController(capture)
    if not controller.open_camera():
        print(f"❌ {controller.notifications[-1].description}")
        return

    try:
        while True:
            # Only this loop reads from the camera; workers get a copy of the frame
            try:
                frame = capture.read_frame()
            except CaptureUnavailableError as e:
                print(f"❌ {e}")
                break
            preview = cv2.flip(frame, 1)

            draw_ui(preview, controller)
            cv2.imshow(WINDOW_NAME, preview)

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            if key == ord('e'):
                run_in_background(controller.detect_emotion, frame.copy())
            elif key == ord('r'):
                run_in_background(controller.recommend)
            elif key == ord('m'):
                controller.set_mood(controller.mood_value + MOOD_STEP)
            elif key == ord('n'):
                controller.set_mood(controller.mood_value - MOOD_STEP)
    finally:
        capture.release()
        cv2.destroyAllWindows()


if __name__ == "__main__":
    start_camera()
