"""Pydantic models for access list requests and responses."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from altitrace.helpers.parsers import is_address, parse_hex_int


BlockTag = Literal["latest", "earliest", "safe", "finalized"]


class AccessListItem(BaseModel):
    """Account and storage slots touched by a transaction."""

    address: str
    storage_keys: list[str] = Field(default_factory=list, alias="storageKeys")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class TransactionCall(BaseModel):
    """Unsent call parameters.

    Field names follow Python conventions; the JSON wire names are kept as
    aliases, so ``TransactionCall.model_validate({"from": ..., "gasPrice": ...})``
    and ``call.to_payload()`` both speak the API's camelCase.
    """

    from_: str | None = Field(default=None, alias="from")
    to: str | None = None
    value: str | None = None
    data: str | None = None
    gas: str | None = None
    gas_price: str | None = Field(default=None, alias="gasPrice")
    max_fee_per_gas: str | None = Field(default=None, alias="maxFeePerGas")
    max_priority_fee_per_gas: str | None = Field(
        default=None, alias="maxPriorityFeePerGas"
    )
    access_list: tuple[AccessListItem, ...] | None = Field(
        default=None, alias="accessList"
    )

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @field_validator("from_", "to")
    @classmethod
    def _check_address(cls, value: str | None) -> str | None:
        if value is not None and not is_address(value):
            msg = f"Invalid Ethereum address: {value}"
            raise ValueError(msg)
        return value

    def to_payload(self) -> dict[str, Any]:
        """Render the call as the API expects it."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TagBlockReference(BaseModel):
    """Block addressed by a named tag."""

    kind: Literal["tag"] = "tag"
    value: BlockTag

    model_config = ConfigDict(frozen=True)

    @property
    def wire(self) -> str:
        return self.value


class NumberBlockReference(BaseModel):
    """Block addressed by its number, stored as a hex quantity."""

    kind: Literal["number"] = "number"
    value: str

    model_config = ConfigDict(frozen=True)

    @property
    def wire(self) -> str:
        return self.value


BlockReference = Annotated[
    TagBlockReference | NumberBlockReference, Field(discriminator="kind")
]


class ExecutionOptions(BaseModel):
    """Per-request transport options.

    ``None`` means "not provided": merging leaves the existing value alone.
    """

    timeout: float | None = Field(default=None, gt=0, description="Seconds")
    headers: dict[str, str] | None = None
    retry: bool | None = None

    model_config = ConfigDict(frozen=True)


class AccessListRequest(BaseModel):
    """Assembled access list request, immutable once built."""

    params: TransactionCall
    block: BlockReference | None = None

    model_config = ConfigDict(frozen=True)

    @field_serializer("block")
    def _serialize_block(
        self, block: TagBlockReference | NumberBlockReference | None
    ) -> str | None:
        return block.wire if block is not None else None

    def to_payload(self) -> dict[str, Any]:
        """Render the request body, leaving ``block`` out when unset."""
        payload: dict[str, Any] = {"params": self.params.to_payload()}
        if self.block is not None:
            payload["block"] = self.block.wire
        return payload


class AccessListSummary(BaseModel):
    """Per-account view of an access list."""

    address: str
    storage_slot_count: int
    storage_slots: list[str]


class AccessListResponse(BaseModel):
    """Access list generated by the simulation API."""

    access_list: list[AccessListItem] = Field(
        default_factory=list, alias="accessList"
    )
    gas_used: str = Field(default="0x0", alias="gasUsed")
    error: str | None = None

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def is_success(self) -> bool:
        return not self.error

    def is_failed(self) -> bool:
        return bool(self.error)

    def total_gas_used(self) -> int:
        return parse_hex_int(self.gas_used)

    def account_count(self) -> int:
        return len(self.access_list)

    def storage_slot_count(self) -> int:
        return sum(len(item.storage_keys) for item in self.access_list)

    def summary(self) -> list[AccessListSummary]:
        return [
            AccessListSummary(
                address=item.address,
                storage_slot_count=len(item.storage_keys),
                storage_slots=list(item.storage_keys),
            )
            for item in self.access_list
        ]

    def has_account(self, address: str) -> bool:
        """Case-insensitive membership check."""
        return self._find(address) is not None

    def account_storage_slots(self, address: str) -> list[str]:
        """Storage slots recorded for ``address``, empty when it is absent."""
        item = self._find(address)
        return list(item.storage_keys) if item is not None else []

    def _find(self, address: str) -> AccessListItem | None:
        normalized = address.lower()
        for item in self.access_list:
            if item.address.lower() == normalized:
                return item
        return None


class ApiErrorBody(BaseModel):
    """Error member of the API envelope."""

    code: str | None = None
    message: str | None = None


class ApiEnvelope(BaseModel):
    """Envelope wrapping every simulation API response."""

    success: bool
    data: dict[str, Any] | None = None
    error: ApiErrorBody | None = None

    model_config = ConfigDict(extra="allow")


__all__ = [
    "AccessListItem",
    "AccessListRequest",
    "AccessListResponse",
    "AccessListSummary",
    "ApiEnvelope",
    "ApiErrorBody",
    "BlockReference",
    "BlockTag",
    "ExecutionOptions",
    "NumberBlockReference",
    "TagBlockReference",
    "TransactionCall",
]
