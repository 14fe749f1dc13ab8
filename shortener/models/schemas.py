from pydantic import BaseModel, Field

class ShortenRequest(BaseModel):
    url: str = Field(..., min_length=1, description="The long URL, stored verbatim")

class ShortenResponse(BaseModel):
    url: str = Field(..., description="The short URL")
