from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BlueBubblesSettings(BaseSettings):
    """
    Loads the BlueBubbles server address and password from the environment or .env.
    """

    server_url: str = Field(alias="BLUEBUBBLES_URL")
    password: str = Field(alias="BLUEBUBBLES_PASSWORD")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,  # Allows BlueBubblesSettings(server_url=..., password=...)
    )
