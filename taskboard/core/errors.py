from fastapi import status


class TaskboardError(Exception):
    """Базовая ошибка приложения, превращается в ответ {"error": message}"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TaskboardError):
    """Некорректное или отсутствующее поле запроса"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthenticationError(TaskboardError):
    """Нет токена, он просрочен или не проходит проверку"""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Not authenticated"


class AuthorizationError(TaskboardError):
    """Личность известна, но режим доступа не позволяет операцию"""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(TaskboardError):
    """Ресурс отсутствует или принадлежит другому пользователю"""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InternalError(TaskboardError):
    """Сбой хранилища или непредвиденная ошибка, детали только в логах"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"
