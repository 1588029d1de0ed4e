from pydantic import BaseModel


class ImageUploadOut(BaseModel):
    url: str
    file_id: str
    name: str
    path: str


class ImageAuthOut(BaseModel):
    token: str
    expire: int
    signature: str
    public_key: str | None = None
    url_endpoint: str | None = None
