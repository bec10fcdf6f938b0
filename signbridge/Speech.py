import logging
import threading
from queue import Empty, Full, Queue

import pyttsx3

logger = logging.getLogger(__name__)


# ==========================================
# SPEECH OUTPUT
# ==========================================
class SpeechBridge:
    """
    Speaks confirmed words on a background thread.

    pyttsx3's runAndWait() blocks, so utterances go through a one-slot queue:
    a newer word replaces one that has not started yet.
    """

    def __init__(self, cfg=None, engine_factory=pyttsx3.init):
        scfg = (cfg or {}).get("speech", {})
        self.enabled = bool(scfg.get("enabled", True))
        self.rate = scfg.get("rate", 165)
        self.volume = scfg.get("volume", 1.0)
        self.engine_factory = engine_factory

        self._queue = Queue(maxsize=1)
        self._stop_event = threading.Event()
        self._thread = None

    def toggle(self) -> bool:
        self.enabled = not self.enabled
        logger.info("Speech %s", "ON" if self.enabled else "OFF")
        return self.enabled

    def start(self) -> None:
        if self._thread is not None:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="speech", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 1.0) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def speak(self, text) -> bool:
        """Queue `text`; returns False when speech is off or nothing to say."""
        if not self.enabled or not text:
            return False
        text = str(text)
        while True:
            try:
                self._queue.put_nowait(text)
                return True
            except Full:
                try:
                    dropped = self._queue.get_nowait()
                    logger.debug("Dropping unspoken '%s'", dropped)
                except Empty:
                    pass

    __call__ = speak

    def _init_engine(self):
        try:
            engine = self.engine_factory()
            engine.setProperty("rate", self.rate)
            engine.setProperty("volume", self.volume)
            return engine
        except Exception as e:
            logger.error("Text-to-speech unavailable, disabling speech: %s", e)
            self.enabled = False
            return None

    def _run(self):
        # pyttsx3 engines must be used from the thread that created them
        engine = self._init_engine()
        if engine is None:
            return

        while not self._stop_event.is_set():
            try:
                text = self._queue.get(timeout=0.1)
            except Empty:
                continue
            if not self.enabled:
                continue
            try:
                engine.say(text)
                engine.runAndWait()
            except RuntimeError as e:
                logger.warning("Speech failed for '%s': %s", text, e)

        try:
            engine.stop()
        except RuntimeError as e:
            logger.debug("Speech engine stop failed: %s", e)
