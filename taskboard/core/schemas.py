from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Базовая схема API: поля в snake_case, JSON в camelCase"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


class MessageResponse(BaseModel):
    """Простое подтверждение операции"""
    message: str


class ErrorResponse(BaseModel):
    """Тело любого ответа с ошибкой"""
    error: str
