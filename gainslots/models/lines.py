"""Input line models."""

from pydantic import BaseModel, ConfigDict

from gainslots.models.enums import LineTag


class Line(BaseModel):
    """One line of flattened statement text, addressed by its offset."""

    model_config = ConfigDict(frozen=True)

    index: int
    text: str

    @property
    def stripped(self) -> str:
        return self.text.strip()


class ClassifiedLine(Line):
    tag: LineTag
