from dataclasses import dataclass, field
from typing import Tuple, Union

PathStep = Union[str, int]
JsonPath = Tuple[PathStep, ...]


@dataclass(frozen=True)
class RGBA:
    """Linear color, channels are not clamped so HDR values survive."""
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    a: float = 0.0

    @property
    def rgb(self) -> Tuple[float, float, float]:
        return self.r, self.g, self.b

    def with_rgb(self, r: float, g: float, b: float) -> "RGBA":
        return RGBA(r, g, b, self.a)

    def to_dict(self) -> dict:
        return {"R": self.r, "G": self.g, "B": self.b, "A": self.a}


@dataclass(frozen=True)
class ColorParameter:
    id: str
    file_name: str
    relative_path: str
    param_name: str
    path: JsonPath
    rgba: RGBA = field(default_factory=RGBA)


@dataclass(frozen=True)
class SourceFile:
    name: str
    text: str
    relative_path: str


@dataclass(frozen=True)
class ColorOptions:
    ignore_grayscale: bool = True
    preserve_intensity: bool = True


@dataclass
class KeywordDictionary:
    include_keywords: list[str] = field(default_factory=list)
    exclude_exact: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "KeywordDictionary":
        return cls(
            include_keywords=[str(k).lower() for k in data.get("include_keywords", [])],
            exclude_exact=[str(k) for k in data.get("exclude_exact", [])],
        )


@dataclass
class LoadReport:
    loaded: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    errors: list = field(default_factory=list)
    parameter_count: int = 0
