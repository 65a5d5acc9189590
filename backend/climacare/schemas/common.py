# climacare/schemas/common.py
from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """Aceita camelCase (API) ou snake_case (atributos do ORM)."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

def blank_to_none(v):
    if isinstance(v, str) and not v.strip():
        return None
    return v

def date_only(v):
    # aceita "2024-01-31T00:00:00Z" vindo do formulário
    if isinstance(v, str) and "T" in v:
        return v.split("T", 1)[0]
    return v

def money_in(v):
    v = blank_to_none(v)
    # "150,90" (formulário pt-BR) -> "150.90"
    if isinstance(v, str):
        return v.strip().replace(",", ".")
    return v

BlankToNone = BeforeValidator(blank_to_none)
DateOnly = BeforeValidator(date_only)
MoneyIn = BeforeValidator(money_in)

def to_out(schema, obj) -> dict:
    """ORM -> dict JSON com chaves camelCase."""
    return schema.model_validate(obj).model_dump(by_alias=True, mode="json")
