class PositiveValue:
    """
    Value Object universal: valida invariante de dominio (valor > 0).
    Building block reusable en CUALQUIER sistema que requiera números positivos.
    """

    def __init__(self, value: int):
        if value <= 0:
            raise ValueError("Must be positive")
        self.value = value


class NonEmptyText:
    """
    Value Object universal: texto obligatorio (ni None ni vacío).
    El nombre del campo se incluye en el mensaje para diagnósticos legibles.
    """

    def __init__(self, value: str | None, field_name: str = "value"):
        if value is None or not str(value):
            raise ValueError(f"'{field_name}' must not be null or empty")
        self.value = str(value)
        self.field_name = field_name

    def equals_ignore_case(self, other: str | None) -> bool:
        if other is None:
            return False
        return self.value.lower() == other.lower()

    def __str__(self) -> str:
        return self.value
