"""TypeIDs - typed, sortable identifiers: a prefix plus a base32 UUID."""

from __future__ import annotations

from datetime import UTC
from datetime import datetime as dt_datetime
from typing import (
    TYPE_CHECKING,
    Any,
    LiteralString,
    Protocol,
    Self,
    get_args,
    get_origin,
    runtime_checkable,
)
from uuid import UUID, uuid7

from pydantic_core import CoreSchema, PydanticCustomError, core_schema

from typeid import base32
from typeid.errors import (
    ParseErrorReason,
    PrefixMismatchError,
    SeparatorError,
    TypeIDError,
)
from typeid.prefix import SEPARATOR, validate_prefix


if TYPE_CHECKING:
    import datetime as dt
    from collections.abc import Callable


# UUIDv7 timestamp extraction (RFC 9562):
# Bits 0-47 contain 48-bit Unix timestamp in milliseconds
_UUIDV7_TIMESTAMP_SHIFT = 80  # 128 - 48 = shift to extract timestamp
_MS_PER_SECOND = 1000


@runtime_checkable
class TypeIDType(Protocol):
    """Protocol for any TypeID, useful for generic function signatures.

    Example:
        def log_entity(entity_id: TypeIDType) -> None:
            print(f"{entity_id.prefix} created at {entity_id.datetime}")
    """

    __slots__ = ()

    @property
    def prefix(self) -> str:
        """The type prefix (e.g., 'user', 'api_key'); empty for untyped ids."""
        ...

    @property
    def value(self) -> bytes:
        """The 16-byte big-endian value."""
        ...

    @property
    def uuid(self) -> UUID:
        """The value as a UUID."""
        ...

    @property
    def suffix(self) -> str:
        """The base32-encoded value (26 characters)."""
        ...

    @property
    def datetime(self) -> dt.datetime:
        """The timestamp extracted from a UUIDv7 value."""
        ...

    def __str__(self) -> str:
        """String representation as '<prefix>_<suffix>' or '<suffix>'."""
        ...


def _check_value(value: bytes | UUID) -> bytes:
    """Normalize a UUID or bytes-like value to 16 immutable bytes.

    Raises:
        TypeError: If the value is neither bytes-like nor a UUID.
        SuffixError: If the value is not 16 bytes.
    """
    if isinstance(value, UUID):
        return value.bytes
    base32.check_value(value)
    return bytes(value)


def format_typeid(prefix: str, value: bytes | UUID) -> str:
    """Format a prefix and a 16-byte value or UUID as a TypeID string.

    An empty prefix yields the bare suffix with no separator.

    Raises:
        PrefixError: If the prefix is invalid.
        SuffixError: If the value is not 16 bytes.
        TypeError: If the value is neither bytes-like nor a UUID.
    """
    validate_prefix(prefix)
    suffix = base32.encode(_check_value(value))
    return f"{prefix}{SEPARATOR}{suffix}" if prefix else suffix


def _split(text: str) -> tuple[str, str]:
    """Split at the last separator into (prefix, suffix)."""
    index = text.rfind(SEPARATOR)
    if index == -1:
        return "", text
    if index == 0:
        raise SeparatorError(
            f"TypeID with an empty prefix must not contain the separator "
            f"{SEPARATOR!r}, got {text!r}",
            ParseErrorReason.MALFORMED_SEPARATOR,
            0,
        )
    return text[:index], text[index + 1 :]


def parse(text: str) -> TypeID[Any]:
    """Parse a TypeID string.

    The prefix is validated before the suffix is decoded, so when both are
    invalid the prefix error is the one raised.

    Raises:
        TypeIDError: A ``SeparatorError``, ``PrefixError`` or ``SuffixError``
            describing the first problem found.
    """
    prefix, suffix = _split(text)
    validate_prefix(prefix)
    value = base32.decode(suffix)
    return TypeID.unchecked(prefix, value, suffix=suffix.lower())


def try_parse(text: str) -> TypeID[Any] | TypeIDError:
    """Parse a TypeID string, returning the error instead of raising it.

    Example:
        match try_parse(raw):
            case TypeID() as tid:
                handle(tid)
            case TypeIDError(reason=reason, position=position):
                report(reason, position)
    """
    try:
        return parse(text)
    except TypeIDError as e:
        return e


def parse_or_none(text: str) -> TypeID[Any] | None:
    """Parse a TypeID string, returning None if it is invalid."""
    result = try_parse(text)
    return None if isinstance(result, TypeIDError) else result


class TypeID[PREFIX: LiteralString]:
    """Typed, sortable identifier with a validated prefix.

    A TypeID combines an optional prefix (like 'user', 'api_key') with a
    128-bit value, usually a UUIDv7, encoded as 26 base32 characters. The
    prefix enables runtime and static type checking to prevent mixing IDs
    from different domains.

    Example:
        >>> from typing import Literal
        >>> UserId = TypeID[Literal["user"]]
        >>> user_id = TypeID.generate("user")
        >>> print(user_id)  # user_01h455vb4pex5vsknk084sn02q

    Note:
        The `datetime` and `timestamp` properties assume the value is a
        UUIDv7. For other values they return meaningless results.
    """

    __slots__ = ("_prefix", "_suffix", "_value")

    def __init__(self, prefix: PREFIX, value: bytes | UUID) -> None:
        """Initialize a TypeID with a prefix and a 16-byte value or UUID.

        Args:
            prefix: The prefix (lowercase letters and single underscores,
                or empty for an untyped id).
            value: 16 big-endian bytes, or a UUID of any version.

        Raises:
            PrefixError: If the prefix is invalid.
            SuffixError: If the value is not 16 bytes.
            TypeError: If the value is neither bytes-like nor a UUID.
        """
        validate_prefix(prefix)
        self._prefix = prefix
        self._value = _check_value(value)
        self._suffix: str | None = None

    @classmethod
    def unchecked(cls, prefix: PREFIX, value: bytes, *, suffix: str | None = None) -> Self:
        """Build a TypeID from parts that were already validated.

        No check is performed. Use only with a prefix that passed
        ``validate_prefix`` and exactly 16 bytes of value; everything else
        should go through the constructor or ``from_string``.
        """
        instance = cls.__new__(cls)
        instance._prefix = prefix  # noqa: SLF001
        instance._value = value  # noqa: SLF001
        instance._suffix = suffix  # noqa: SLF001
        return instance

    @property
    def prefix(self) -> PREFIX:
        """The prefix (e.g., 'user', 'api_key'); empty for untyped ids."""
        return self._prefix

    @property
    def value(self) -> bytes:
        """The 16-byte big-endian value."""
        return self._value

    @property
    def uuid(self) -> UUID:
        """The value as a UUID (of whatever version it was built from)."""
        return UUID(bytes=self._value)

    @property
    def suffix(self) -> str:
        """The base32-encoded value (26 characters)."""
        if self._suffix is None:
            self._suffix = base32.encode(self._value)
        return self._suffix

    @property
    def datetime(self) -> dt_datetime:
        """The timestamp extracted from the UUIDv7.

        Note:
            This assumes the value is a valid UUIDv7. For other values the
            returned datetime will be meaningless.
        """
        return dt_datetime.fromtimestamp(self.timestamp, tz=UTC)

    @property
    def timestamp(self) -> float:
        """The Unix timestamp (seconds) from the UUIDv7."""
        ms = int.from_bytes(self._value, "big") >> _UUIDV7_TIMESTAMP_SHIFT
        return ms / _MS_PER_SECOND

    def __str__(self) -> str:
        """Return '<prefix>_<suffix>', or the bare suffix without a prefix."""
        if not self._prefix:
            return self.suffix
        return f"{self._prefix}{SEPARATOR}{self.suffix}"

    def __repr__(self) -> str:
        """Return a detailed representation."""
        return f"TypeID({self._prefix!r}, {self.suffix!r})"

    def __hash__(self) -> int:
        """Return hash for use in sets and dict keys."""
        return hash((self._prefix, self._value))

    def __eq__(self, other: object) -> bool:
        """Check equality with another TypeID."""
        if isinstance(other, TypeID):
            return self._prefix == other._prefix and self._value == other._value
        return NotImplemented

    def __lt__(self, other: object) -> bool:
        """Compare for sorting (by prefix, then by value)."""
        if isinstance(other, TypeID):
            return (self._prefix, self._value) < (other._prefix, other._value)
        return NotImplemented

    def __le__(self, other: object) -> bool:
        """Compare for sorting (by prefix, then by value)."""
        if isinstance(other, TypeID):
            return (self._prefix, self._value) <= (other._prefix, other._value)
        return NotImplemented

    def __gt__(self, other: object) -> bool:
        """Compare for sorting (by prefix, then by value)."""
        if isinstance(other, TypeID):
            return (self._prefix, self._value) > (other._prefix, other._value)
        return NotImplemented

    def __ge__(self, other: object) -> bool:
        """Compare for sorting (by prefix, then by value)."""
        if isinstance(other, TypeID):
            return (self._prefix, self._value) >= (other._prefix, other._value)
        return NotImplemented

    def __copy__(self) -> Self:
        """Return self (TypeIDs are immutable)."""
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> Self:
        """Return self (TypeIDs are immutable)."""
        return self

    def __reduce__(self) -> tuple[type[Self], tuple[str, bytes]]:
        """Support pickling for multiprocessing, caching, etc."""
        return (type(self), (self._prefix, self._value))

    @classmethod
    def from_uuid(cls, uid: UUID, prefix: PREFIX = "") -> Self:  # type: ignore[assignment]
        """Create a TypeID from a UUID of any version.

        Raises:
            PrefixError: If the prefix is invalid.
        """
        return cls(prefix, uid)

    @classmethod
    def generate(cls, prefix: PREFIX = "") -> Self:  # type: ignore[assignment]
        """Generate a new TypeID backed by a fresh UUIDv7.

        Args:
            prefix: The prefix, or empty for an untyped id.

        Raises:
            PrefixError: If the prefix is invalid.
        """
        validate_prefix(prefix)
        return cls.unchecked(prefix, uuid7().bytes)

    @classmethod
    def from_string(cls, string: str, prefix: PREFIX | None = None) -> Self:
        """Parse a TypeID from its string representation.

        Args:
            string: The string to parse ('<prefix>_<suffix>' or '<suffix>').
            prefix: The expected prefix. If given, a TypeID with any other
                prefix is rejected.

        Raises:
            TypeIDError: If the string is invalid or the prefix doesn't match.
        """
        parsed = parse(string)
        if prefix is not None and parsed.prefix != prefix:
            raise PrefixMismatchError(
                f"Expected prefix {prefix!r}, got {parsed.prefix!r}",
                ParseErrorReason.PREFIX_MISMATCH,
            )
        return cls.unchecked(parsed.prefix, parsed.value, suffix=parsed.suffix)  # type: ignore[arg-type]

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,  # noqa: ANN401
        handler: Any,  # noqa: ANN401
    ) -> CoreSchema:
        """Pydantic integration for validation and serialization.

        Note:
            This method accesses typing internals (__args__, __value__) which
            may change between Python versions.
        """
        if get_origin(source_type) is None:
            msg = "TypeID must be parameterized with a prefix literal, e.g. TypeID[Literal['user']]"
            raise TypeError(msg)

        prefix_str = _get_prefix(source_type)

        def validate(v: TypeID[Any] | str) -> TypeID[Any]:
            if isinstance(v, str):
                return cls.from_string(v, prefix_str)
            if isinstance(v, TypeID):
                if v.prefix != prefix_str:
                    raise PrefixMismatchError(
                        f"Expected prefix {prefix_str!r}, got {v.prefix!r}",
                        ParseErrorReason.PREFIX_MISMATCH,
                    )
                return v
            raise PydanticCustomError(
                "typeid_type",
                "Expected TypeID or str, got {type_name}",
                {"type_name": type(v).__name__},
            )

        return core_schema.json_or_python_schema(
            json_schema=core_schema.chain_schema(
                [
                    core_schema.str_schema(),
                    core_schema.no_info_plain_validator_function(validate),
                ]
            ),
            python_schema=core_schema.no_info_plain_validator_function(validate),
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )


def _get_prefix[PREFIX: LiteralString](typeid_type: type[TypeID[PREFIX]]) -> str:
    """Extract the prefix string from a parameterized TypeID type.

    Raises:
        TypeError: If the type carries no Literal prefix.
    """
    args = get_args(typeid_type)
    if not args:
        msg = "TypeID type must be parameterized with a Literal prefix"
        raise TypeError(msg)
    literal_type = args[0]
    literal_args = get_args(literal_type)
    # Handle TypeVar case (Python 3.12+ type parameter syntax)
    if not literal_args and hasattr(literal_type, "__value__"):  # pragma: no cover
        literal_args = get_args(literal_type.__value__)
    if not literal_args:
        msg = f"Could not extract a Literal prefix from {literal_type!r}"
        raise TypeError(msg)
    return literal_args[0]


def factory[PREFIX: LiteralString](
    typeid_type: type[TypeID[PREFIX]],
) -> Callable[[], TypeID[PREFIX]]:
    """Create a factory function for generating new TypeIDs of a specific type.

    This is useful with Pydantic's Field(default_factory=...).

    Example:
        UserId = TypeID[Literal["user"]]

        class User(BaseModel):
            id: UserId = Field(default_factory=factory(UserId))
    """
    prefix = _get_prefix(typeid_type)
    validate_prefix(prefix)

    def _factory() -> TypeID[PREFIX]:
        return TypeID.generate(prefix)  # type: ignore[arg-type]

    return _factory


def parser[PREFIX: LiteralString](
    typeid_type: type[TypeID[PREFIX]],
) -> Callable[[str], TypeID[PREFIX]]:
    """Create a parse function that only accepts one prefix.

    Raises TypeIDError on invalid input.

    Example:
        UserId = TypeID[Literal["user"]]
        parse_user_id = parser(UserId)

        try:
            user_id = parse_user_id("user_01h455vb4pex5vsknk084sn02q")
        except TypeIDError as e:
            print(f"Invalid ID: {e.reason}")
    """
    prefix = _get_prefix(typeid_type)

    def _parse(v: str) -> TypeID[PREFIX]:
        return TypeID.from_string(v, prefix)  # type: ignore[arg-type]

    return _parse
