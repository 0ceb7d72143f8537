from pydantic import BaseModel, Field


class SellRequest(BaseModel):
    ore_id: str = Field(..., min_length=1, max_length=32)
    quantity: int = Field(..., gt=0)


class SaleOut(BaseModel):
    ship_id: int
    credits_earned: int
    credits_balance: int
    ore_cargo: dict[str, int]


class OrePriceOut(BaseModel):
    ore_id: str
    name: str
    unit_price: int
    held: int


class ResourceCostRequest(BaseModel):
    # {ore_id: units}
    requirements: dict[str, int] = Field(default_factory=dict)


class ResourceRowOut(BaseModel):
    ore_id: str
    amount: int
    name: str
    icon: str


class ShortfallOut(BaseModel):
    ore_id: str
    name: str
    required: int
    available: int
    missing: int

    model_config = {"from_attributes": True}


class ResourceCheckOut(BaseModel):
    affordable: bool
    shortfalls: list[ShortfallOut]
    # Display rows for the bill itself, in request order
    requirements: list[ResourceRowOut] = []
