"""
Stored Document Base

Every record in the key-value store is a JSON document written by an older
or newer version of the app, or restored from a hand-edited backup.
Readers must never crash on such a document.

DESIGN DECISION: Defaults are declared per field on the schema, and applied
during deserialization. A field that is missing OR fails validation falls
back to its own default; the remaining fields are kept. We never spread-merge
raw dicts over defaults.
"""

from decimal import Decimal
from typing import Annotated, Any, TypeVar, Union

from pydantic import BaseModel, ConfigDict, PlainSerializer, ValidationError

from nova_spend.observability import get_logger

logger = get_logger(__name__)


def _to_json_number(value: Decimal) -> Union[int, float]:
    """Integral decimals become ints (50, not 50.0), the rest become floats."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


# Decimal in Python, plain JSON number in the store
Money = Annotated[Decimal, PlainSerializer(_to_json_number, when_used="json")]

DocumentT = TypeVar("DocumentT", bound="StoredDocument")


class StoredDocument(BaseModel):
    """
    Base for records persisted as camelCase JSON objects.

    Subclasses declare snake_case attributes with camelCase aliases;
    both spellings are accepted on input, aliases are written on output.
    Unknown keys (e.g. legacy fields) are ignored and dropped on next write.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    @classmethod
    def from_document(cls: type[DocumentT], document: Any) -> DocumentT:
        """
        Build a model from a raw stored document with field-level defaults.

        A document that is not a JSON object yields a fully defaulted model.
        """
        if not isinstance(document, dict):
            if document is not None:
                logger.warning(
                    "document_not_an_object",
                    model=cls.__name__,
                    found=type(document).__name__,
                )
            return cls()

        data = dict(document)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            invalid = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}
            for name, field in cls.model_fields.items():
                if name in invalid or field.alias in invalid:
                    data.pop(name, None)
                    if field.alias:
                        data.pop(field.alias, None)
            logger.warning(
                "invalid_fields_defaulted",
                model=cls.__name__,
                fields=sorted(invalid),
            )
            return cls.model_validate(data)

    def to_document(self) -> dict[str, Any]:
        """Serialize to the JSON document stored under this record's key."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
