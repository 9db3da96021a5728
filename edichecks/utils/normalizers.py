from typing import Any


def coerce_key(value: Any) -> str | None:
    """
    Привести значение ключа из строки выборки к строке.

    Пустые значения становятся None. Регистр и пробелы не трогаем:
    ключи сравниваются строго.
    """
    if value is None or value == "":
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def is_absent(value: Any) -> bool:
    """Отсутствует, null или пустая строка. Числовой 0 считается значением."""
    return value is None or value == ""


def is_falsy(value: Any) -> bool:
    """
    Ложность значения в терминах JSON-источника.

    В отличие от Python, пустые списки и объекты считаются заполненными.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    return False
