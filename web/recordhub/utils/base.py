"""
Metaclass for process-wide shared objects (database handle, app factory).
"""
import threading


class Base(type):
    """
    Keeps one instance per class, created lazily under a lock.
    """
    _instances = {}
    _lock = threading.Lock()

    def __call__(cls, *args, **kwargs):
        if cls not in cls._instances:
            with cls._lock:
                if cls not in cls._instances:
                    cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]

    def discard(cls):
        """Forget the shared instance of this class only."""
        with Base._lock:
            Base._instances.pop(cls, None)

    @classmethod
    def clear_instances(mcs):
        """Forget every shared instance (used between test cases)."""
        with mcs._lock:
            mcs._instances.clear()
