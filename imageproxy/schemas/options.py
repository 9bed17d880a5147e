"""
Transform options.

Options is the immutable request record handed to the transform core. Numeric
geometry fields are dual-mode: values strictly between 0 and 1 are fractions
of the reference dimension, anything else is an absolute pixel count.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Options(BaseModel):
    """Declarative transform request."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    width: float = Field(0, description="Target width, 0 = unspecified")
    height: float = Field(0, description="Target height, 0 = unspecified")
    scale_up: bool = Field(False, description="Allow enlarging beyond the source size")
    fit: bool = Field(False, description="Contain inside the box instead of filling it")

    crop_x: float = Field(0, description="Crop origin, negative measures from the right edge")
    crop_y: float = Field(0, description="Crop origin, negative measures from the bottom edge")
    crop_width: float = Field(0, description="Crop width, 0 = to the image edge")
    crop_height: float = Field(0, description="Crop height, 0 = to the image edge")
    smart_crop: bool = Field(False, description="Content-aware crop to width x height")

    rotate: float = Field(0, description="Clockwise rotation in degrees")
    flip_vertical: bool = False
    flip_horizontal: bool = False

    format: str = Field("", description="Output format override, empty = derive from source")
    quality: int = Field(0, ge=0, le=100, description="JPEG quality, 0 = configured default")

    @field_validator("format")
    @classmethod
    def normalize_format(cls, v: str) -> str:
        return v.strip().lower()

    def transform(self) -> bool:
        """Report whether any field requests a non-identity operation."""
        return (
            self.width != 0
            or self.height != 0
            or self.rotate != 0
            or self.flip_vertical
            or self.flip_horizontal
            or self.quality != 0
            or self.format != ""
            or self.crop_x != 0
            or self.crop_y != 0
            or self.crop_width != 0
            or self.crop_height != 0
        )

    def has_explicit_crop(self) -> bool:
        return (
            self.crop_x != 0 or self.crop_y != 0 or self.crop_width != 0 or self.crop_height != 0
        )

    def to_dict(self) -> Dict[str, Any]:
        """Non-default fields only."""
        return self.model_dump(exclude_defaults=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Options":
        return cls(**data)

    def __str__(self) -> str:
        parts = []
        if self.width or self.height:
            parts.append(f"{self.width:g}x{self.height:g}")
        if self.fit:
            parts.append("fit")
        if self.scale_up:
            parts.append("scaleUp")
        if self.smart_crop:
            parts.append("sc")
        if self.has_explicit_crop():
            parts.append(
                f"cx{self.crop_x:g},cy{self.crop_y:g},cw{self.crop_width:g},ch{self.crop_height:g}"
            )
        if self.rotate:
            parts.append(f"r{self.rotate:g}")
        if self.flip_vertical:
            parts.append("fv")
        if self.flip_horizontal:
            parts.append("fh")
        if self.format:
            parts.append(self.format)
        if self.quality:
            parts.append(f"q{self.quality}")
        return ",".join(parts) or "identity"
