"""Base manager class for CSS Validator."""

import logging
from typing import Dict, Any, Optional
from abc import ABC, abstractmethod

class BaseManager(ABC):
    """Base class for managers that own shared resources."""
    
    def __init__(self):
        """Initialize base manager."""
        self.logger = logging.getLogger(self.__class__.__name__)
        
    @abstractmethod
    def check_resources(self) -> None:
        """Check resource usage against limits."""
        pass
        
    @abstractmethod
    def get_stats(self) -> Dict[str, Any]:
        """Get usage statistics."""
        pass
        
    def log_error(self, message: str, error: Optional[Exception] = None) -> None:
        """Log error message.
        
        Args:
            message: Error message
            error: Optional exception
        """
        if error:
            self.logger.error(f"{message}: {error}")
        else:
            self.logger.error(message)
        
    def cleanup(self) -> None:
        """Release resources."""
        pass
        
    def __enter__(self):
        return self
        
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()

# Exported class
__all__ = ['BaseManager']
