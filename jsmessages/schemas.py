from pydantic import BaseModel


class LanguagesResponse(BaseModel):
    languages: list[str]
    default: str


class InvalidNamespaceResponse(BaseModel):
    detail: str
    namespace: str
