"""
Background resizing for responsive front ends.

A worker thread runs the resize loop and pushes every intermediate image
into a one-slot queue (one producer, one consumer). Intermediate frames are
only informational: the producer replaces an unread frame with the newer one
and the consumer reads whatever is newest, so at most one frame is held.
There is no cancellation: a consumer that loses interest stops reading and
the daemon thread finishes on its own.
"""

import queue
import threading
from typing import Optional

import torch

from .carving import iter_resize


def drain_latest(channel: queue.Queue):
    """Empty `channel` without blocking and return the last item, or None."""
    latest = None
    while True:
        try:
            latest = channel.get_nowait()
        except queue.Empty:
            return latest


class BackgroundResize:
    """
    Run ``resize_to_width`` on a worker thread and stream its frames.

    Usage:
        job = BackgroundResize(image, 200).start()
        while not job.done:
            frame = job.latest()
            if frame is not None:
                show(frame)
        final = job.result()

    Args:
        image: uint8 image tensor (3, H, W)
        target_width: Width to reduce to
        **options: Passed to ``iter_resize`` (neighborhood, n_workers, ...)
    """

    def __init__(self, image: torch.Tensor, target_width: int, **options):
        # Bad arguments raise here, in the caller's thread
        self._frames = iter_resize(image, target_width, **options)
        self._result = image
        self._error: Optional[BaseException] = None
        self.channel: queue.Queue = queue.Queue(maxsize=1)
        self._thread = threading.Thread(target=self._run, name="caire-resize", daemon=True)

    def start(self) -> "BackgroundResize":
        self._thread.start()
        return self

    def _run(self):
        try:
            for frame in self._frames:
                self._result = frame
                self._publish(frame)
        except Exception as exc:
            self._error = exc

    def _publish(self, frame: torch.Tensor):
        while True:
            try:
                self.channel.put_nowait(frame)
                return
            except queue.Full:
                # Drop the unread older frame
                drain_latest(self.channel)

    @property
    def done(self) -> bool:
        """True once the worker has stopped, successfully or not."""
        return self._thread.ident is not None and not self._thread.is_alive()

    def latest(self) -> Optional[torch.Tensor]:
        """Most recent frame since the last call, or None if none arrived."""
        return drain_latest(self.channel)

    def result(self, timeout: Optional[float] = None) -> torch.Tensor:
        """
        Wait for the worker and return the final image.

        Re-raises whatever exception stopped the worker. Raises TimeoutError
        if the worker is still running after `timeout` seconds.
        """
        self._thread.join(timeout)
        if self._thread.is_alive():
            raise TimeoutError(f"Resize still running after {timeout} seconds")
        if self._error is not None:
            raise self._error
        return self._result
