from pydantic import BaseModel, ConfigDict, Field

# Wire models for the raw /pokemon/{name} payload (Internal Contract)
# Strict mode: "20" is not a height, true is not a weight
class Sprites(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)

    front_default: str | None = None

class PokemonPayload(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)

    name: str
    height: int
    weight: int
    sprites: Sprites

# Model for the decoded record handed to the view layer
class PokemonRecord(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    height_decimeters: int = Field(alias="height")
    weight_hectograms: int = Field(alias="weight")
    sprite_url: str | None = None
