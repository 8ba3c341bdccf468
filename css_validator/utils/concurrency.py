"""Concurrency utilities for CSS Validator."""

from typing import Any, Dict, List
from threading import RLock

class ThreadSafeDict(dict):
    """Thread-safe dictionary implementation."""
    
    def __init__(self):
        """Initialize thread-safe dictionary."""
        super().__init__()
        self._lock = RLock()
        
    def __getitem__(self, key: str) -> Any:
        with self._lock:
            return super().__getitem__(key)
            
    def __setitem__(self, key: str, value: Any) -> None:
        with self._lock:
            super().__setitem__(key, value)
            
    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            return super().get(key, default)
            
    def update(self, other: Dict[str, Any]) -> None:
        with self._lock:
            super().update(other)

    def increment(self, key: str, amount: int = 1) -> int:
        """Atomically add ``amount`` to a counter.
        
        Args:
            key: Counter name
            amount: Value to add
            
        Returns:
            New counter value
        """
        with self._lock:
            value = super().get(key, 0) + amount
            super().__setitem__(key, value)
            return value

    def snapshot(self) -> Dict[str, Any]:
        """Return a plain copy of the current contents."""
        with self._lock:
            return dict(super().items())

    def items(self) -> List[tuple]:
        with self._lock:
            return list(super().items())

    def __len__(self):
        with self._lock:
            return super().__len__()

# Exported classes
__all__ = ['ThreadSafeDict']
