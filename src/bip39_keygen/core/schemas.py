"""Pydantic schemas for the key-generation workflow.

- SshKeyRequest: Validated user options for one key pair
- KeyArtifact: A single file (path, content, mode) to be written
- KeygenResult: What was written

All schemas use Pydantic v2 for validation.
"""

from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator


class KeyType(str, Enum):
    """Supported SSH key algorithms."""

    ED25519 = "ed25519"

    def __str__(self) -> str:
        return self.value


class SshKeyRequest(BaseModel):
    """Options for generating one SSH key pair.

    Attributes:
        key_type: Key algorithm
        output_dir: Directory receiving both key files
        output_name: Private key file name; the public key gets ``.pub``
            appended. Defaults to ``id_<key type>``.
        comment: Comment stored in the public key
    """

    key_type: KeyType = KeyType.ED25519
    output_dir: Path
    output_name: str = ""
    comment: str = ""

    @field_validator("output_name")
    @classmethod
    def validate_output_name(cls, value: str) -> str:
        if value in (".", "..") or "/" in value or "\\" in value or "\x00" in value:
            raise ValueError("output name must be a plain file name")
        return value

    @model_validator(mode="after")
    def default_output_name(self) -> "SshKeyRequest":
        if not self.output_name:
            self.output_name = f"id_{self.key_type.value}"
        return self

    @property
    def private_key_path(self) -> Path:
        return self.output_dir / self.output_name

    @property
    def public_key_path(self) -> Path:
        return self.output_dir / f"{self.output_name}.pub"


class KeyArtifact(BaseModel):
    """A key file to be written as part of one transaction."""

    role: Literal["public", "private"]
    path: Path
    content: bytes = Field(repr=False)
    mode: int = 0o644

    model_config = {"frozen": True}


class KeygenResult(BaseModel):
    """Outcome of a successful key-generation run."""

    key_type: KeyType
    public_key_path: Path
    private_key_path: Path
    public_key: str
    fingerprint: str
