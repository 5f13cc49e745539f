"""Builders for the form documents seeded before a suite runs."""

import base64
from pathlib import Path
from typing import Dict

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

XML_CONTENT_TYPE = "application/octet-stream"


class Attachment(BaseModel):
    content_type: str = XML_CONTENT_TYPE
    data: str

    def decode(self) -> bytes:
        return base64.b64decode(self.data)


class FormDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    internalId: str
    title: str
    type: str = "form"
    attachments: Dict[str, Attachment] = Field(alias="_attachments")

    @property
    def xml(self) -> bytes:
        return self.attachments["xml"].decode()

    def to_doc(self) -> dict:
        """Serialise to the JSON shape the data store expects."""
        return self.model_dump(by_alias=True)


def build_form_document(xml: bytes | str, doc_id: str, internal_id: str, title: str) -> FormDocument:
    if isinstance(xml, str):
        xml = xml.encode("utf-8")
    return FormDocument(
        _id=doc_id,
        internalId=internal_id,
        title=title,
        _attachments={"xml": Attachment(data=base64.b64encode(xml).decode("ascii"))},
    )


def read_form_document(form_id: str, forms_dir: str | Path) -> FormDocument:
    """Read `<forms_dir>/<form_id>.xml` and wrap it as a form document.

    The file bytes are attached unchanged.
    """
    form_path = Path(forms_dir) / f"{form_id}.xml"
    xml = form_path.read_bytes()
    logger.debug(f"Read form {form_id} from {form_path} ({len(xml)} bytes)")
    return build_form_document(xml, f"form:{form_id}", form_id, f"Form {form_id}")
