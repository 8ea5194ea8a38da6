# tests/fakes.py

from concurrent.futures import Executor, Future

from node_viewer.core.file_sources import FileInputSurface


class FakeSurface(FileInputSurface):
    """A file chooser the test answers by calling select()."""

    def __init__(self):
        self.callbacks = []
        self.triggered = False

    def on_change(self, callback):
        self.callbacks.append(callback)

    def trigger(self):
        self.triggered = True

    def select(self, path):
        for callback in self.callbacks:
            callback(path)


class SurfaceFactory:
    """Hands out FakeSurfaces and remembers them in creation order."""

    def __init__(self):
        self.surfaces = []

    def __call__(self):
        surface = FakeSurface()
        self.surfaces.append(surface)
        return surface


class ImmediateExecutor(Executor):
    """Runs submitted work on the spot, so async reads finish deterministically."""

    def submit(self, fn, *args, **kwargs):
        future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future
