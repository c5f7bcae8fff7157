from __future__ import annotations

from pathlib import Path
from typing import Optional
import yaml
from pydantic import BaseModel, Field

from .isbn_ranges import DEFAULT_RANGE_URL, DEFAULT_TIMEOUT, RangeAuthority

# ---- ISBN range reference data ----
class RangeConfig(BaseModel):
    url: str = DEFAULT_RANGE_URL
    timeout: float = DEFAULT_TIMEOUT
    file: Optional[Path] = None  # saved RangeMessage.xml; wins over url when set

    def authority(self) -> RangeAuthority:
        if self.file:
            return RangeAuthority.from_file(self.file)
        return RangeAuthority.from_url(self.url, timeout=self.timeout)

# ---- Telephone numbers ----
class PhoneConfig(BaseModel):
    locale: Optional[str] = None  # None = process locale
    country_code_required: bool = False

# ---- Defaults for the numeric validators (0 = unconstrained) ----
class NumberDefaults(BaseModel):
    currency_decimals: int = Field(default=0, ge=0)
    percentage_digits: int = Field(default=0, ge=0)
    double_digits: int = Field(default=0, ge=0)

# ---- Root config ----
class NormcheckConfig(BaseModel):
    ranges: RangeConfig = Field(default_factory=RangeConfig)
    phone: PhoneConfig = Field(default_factory=PhoneConfig)
    numbers: NumberDefaults = Field(default_factory=NumberDefaults)

# ---- Loader ----
def load_config(path: Optional[Path]) -> NormcheckConfig:
    if not path:
        return NormcheckConfig()
    data = yaml.safe_load(Path(path).read_text()) or {}
    return NormcheckConfig(**data)
