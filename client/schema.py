from pydantic import BaseModel, ConfigDict, Field


class ClientSchema(BaseModel):
    id: str
    name: str
    email: str
    model_config = ConfigDict(from_attributes=True)


# PUBLIC payload from the login screen
class ClientLoginPayload(BaseModel):
    client_id: str = Field(..., min_length=1, description="Client identifier, accepted as-is")
    model_config = ConfigDict(extra="forbid")
