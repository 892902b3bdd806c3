from .load_session_user_use_case import LoadSessionUserUseCase, SessionUser

__all__ = ["LoadSessionUserUseCase", "SessionUser"]
