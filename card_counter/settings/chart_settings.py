from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class ChartSettings(BaseSettings):
    title: str = Field(default="Burndown Chart")
    remaining_label: str = Field(default="Remaining")
    completed_label: str = Field(default="Completed")
    width: int = Field(default=800, gt=0, description="SVG plot area width in pixels")
    height: int = Field(default=400, gt=0, description="SVG plot area height in pixels")
    padding: int = Field(default=60, ge=0, description="SVG margin around the plot area")
    grid_lines: int = Field(default=5, ge=1, description="Number of horizontal gridlines")
    max_x_labels: int = Field(default=14, ge=2, description="Most date labels on the x axis")
    ascii_columns: int = Field(default=60, ge=10)
    ascii_rows: int = Field(default=15, ge=3)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="card_counter_chart_",
        extra="ignore",
    )
