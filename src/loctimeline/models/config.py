"""Configuration models."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChartConfig(BaseModel):
    """Geometry of the scatterplot."""

    width: int = Field(700, gt=0, description="Total chart width")
    height: int = Field(380, gt=0, description="Total chart height")
    margin_top: int = Field(20, ge=0)
    margin_right: int = Field(20, ge=0)
    margin_bottom: int = Field(40, ge=0)
    margin_left: int = Field(50, ge=0)
    radius_min: float = Field(3, gt=0, description="Radius of the smallest commit")
    radius_max: float = Field(18, gt=0, description="Radius of the largest commit")
    x_tick_count: int = Field(6, gt=0, description="Approximate number of time ticks")
    y_tick_count: int = Field(8, gt=0, description="Approximate number of hour ticks")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "width": 700,
                "height": 380,
                "margin_top": 20,
                "margin_right": 20,
                "margin_bottom": 40,
                "margin_left": 50,
                "radius_min": 3,
                "radius_max": 18,
            }
        }
    )

    @property
    def inner_width(self) -> int:
        return self.width - self.margin_left - self.margin_right

    @property
    def inner_height(self) -> int:
        return self.height - self.margin_top - self.margin_bottom


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are prefixed with LOCTIMELINE_ (e.g., LOCTIMELINE_REPO_URL).
    """

    model_config = SettingsConfigDict(
        env_prefix="LOCTIMELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Data
    repo_url: str = "https://github.com/example/portfolio"
    data_file: Path = Path("loc.csv")

    # Chart geometry
    chart_width: int = 700
    chart_height: int = 380
    margin_top: int = 20
    margin_right: int = 20
    margin_bottom: int = 40
    margin_left: int = 50
    radius_min: float = 3
    radius_max: float = 18

    # Fraction of the viewport height at which a narrative step is entered
    step_offset: float = Field(0.6, ge=0, le=1)

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    def chart_config(self) -> ChartConfig:
        """Build the chart geometry from the flat settings."""
        return ChartConfig(
            width=self.chart_width,
            height=self.chart_height,
            margin_top=self.margin_top,
            margin_right=self.margin_right,
            margin_bottom=self.margin_bottom,
            margin_left=self.margin_left,
            radius_min=self.radius_min,
            radius_max=self.radius_max,
        )
