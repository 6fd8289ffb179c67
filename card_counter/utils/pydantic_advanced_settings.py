from typing import Tuple, Type

from pydantic_settings import BaseSettings, JsonConfigSettingsSource, PydanticBaseSettingsSource


class CustomizedSettings(BaseSettings):
    """
    Settings that also read the JSON file named by ``json_file`` in
    ``model_config``. Priority: init values, JSON file, environment,
    ``.env``, secrets. A missing file contributes nothing.
    """

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            JsonConfigSettingsSource(settings_cls),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
