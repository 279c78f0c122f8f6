from .auth import LoginView, LogoutView
from .me import MeView

__all__ = ["LoginView", "LogoutView", "MeView"]
