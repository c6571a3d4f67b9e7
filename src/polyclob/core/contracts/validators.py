"""
Wire Contract Validators — JSON Schema контракты биржи

Контракты (schema/ внутри пакета, Draft 2020-12):
- signed_order : подписанный ордер в поле order тела POST /order
- typed_data   : EIP-712 документ, который получает signer

OrderBuilder прогоняет каждый собранный ордер через signed_order до того,
как вернуть его вызывающему коду. Валидаторы создаются один раз на контракт.
"""

import json
from pathlib import Path
from typing import Any, Dict, Final, Iterator, List, Optional

from jsonschema import Draft202012Validator, SchemaError, ValidationError


SIGNED_ORDER_CONTRACT: Final[str] = "signed_order"
TYPED_DATA_CONTRACT: Final[str] = "typed_data"

_PACKAGED_SCHEMA_DIR: Final[Path] = Path(__file__).parent / "schema"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Чтение и meta-валидация schema/<name>.json с кэшем по имени."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self.schema_dir = schema_dir or _PACKAGED_SCHEMA_DIR
        if not self.schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self.schema_dir}")
        self._cache: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, name: str) -> Dict[str, Any]:
        """
        Raises:
            FileNotFoundError: Нет файла схемы
            ValueError: Файл не является валидной Draft 2020-12 схемой
        """
        cached = self._cache.get(name)
        if cached is not None:
            return cached

        path = self.schema_dir / f"{name}.json"
        if not path.is_file():
            raise FileNotFoundError(f"Schema not found: {path}")

        schema = json.loads(path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except SchemaError as exc:
            raise ValueError(f"Invalid JSON Schema in {path.name}: {exc.message}") from exc

        self._cache[name] = schema
        return schema


_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Проверка payload против одного wire-контракта."""

    contract: str = ""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        self.schema = (loader or _LOADER).load_schema(self.contract)
        self._validator = Draft202012Validator(self.schema)

    def validate(self, payload: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Первое нарушение контракта
        """
        self._validator.validate(payload)

    def is_valid(self, payload: Dict[str, Any]) -> bool:
        return self._validator.is_valid(payload)

    def iter_errors(self, payload: Dict[str, Any]) -> Iterator[ValidationError]:
        return self._validator.iter_errors(payload)

    def describe_errors(self, payload: Dict[str, Any]) -> List[str]:
        """Все нарушения в виде '<путь>: <сообщение>' (для логов и ошибок)."""
        return sorted(
            f"{'/'.join(str(p) for p in error.absolute_path) or '<root>'}: {error.message}"
            for error in self.iter_errors(payload)
        )


class SignedOrderValidator(ContractValidator):
    contract = SIGNED_ORDER_CONTRACT


class TypedDataValidator(ContractValidator):
    contract = TYPED_DATA_CONTRACT


_VALIDATORS: Dict[str, ContractValidator] = {}


def _validator_for(cls: type) -> ContractValidator:
    validator = _VALIDATORS.get(cls.contract)
    if validator is None:
        validator = _VALIDATORS[cls.contract] = cls()
    return validator


def validate_signed_order(payload: Dict[str, Any]) -> None:
    """
    Wire-представление подписанного ордера (SignedOrder.to_wire()).

    Raises:
        ValidationError: Если ордер нарушает контракт
    """
    _validator_for(SignedOrderValidator).validate(payload)


def validate_typed_data(payload: Dict[str, Any]) -> None:
    """
    EIP-712 документ (TypedData.to_dict()).

    Raises:
        ValidationError: Если документ нарушает контракт
    """
    _validator_for(TypedDataValidator).validate(payload)


def signed_order_violations(payload: Dict[str, Any]) -> List[str]:
    """Все нарушения контракта signed_order (пустой список, если их нет)."""
    return _validator_for(SignedOrderValidator).describe_errors(payload)
