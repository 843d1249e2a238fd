from app.core.types import Base, InternalBase


class PublicImage(Base):
    url: str


class StoredImage(InternalBase):
    url: str
    # Storage handle, never serialized to clients
    blob_name: str

    def to_public(self) -> PublicImage:
        return PublicImage(url=self.url)
