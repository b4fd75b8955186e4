from pydantic import BaseModel, ConfigDict, Field


class RemoteConfigOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    version: int
    api_base_url: str = Field(alias="apiBaseUrl")
