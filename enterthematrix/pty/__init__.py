from .io import StreamProxy
from .resize import ResizeWatcher
from .tty import Terminal

__all__ = ['ResizeWatcher', 'StreamProxy', 'Terminal']
