"""FastAPI dependencies. Override in tests via app.dependency_overrides."""

from fastapi import Depends

from .config import CalculatorConfig, Settings, settings as app_settings


def get_settings() -> Settings:
    return app_settings


def get_config(settings: Settings = Depends(get_settings)) -> CalculatorConfig:
    """Calculator config built from the (overridable) settings dependency."""
    return settings.calculator_config()
