"""
Order Submission
================

Builds the JSON body of a public order. Files are inlined as base64 with
their name and MIME type; anything over MAX_FILE_SIZE has to be shared as
a link instead. All checks run before any network call.
"""

import base64
import mimetypes
import os

from printbee.modules.orders.models import ValidationError, validate_order_fields, REQUIRED_FIELDS

MAX_FILE_SIZE = 100 * 1024 * 1024  # 100 MB, inclusive

DEFAULT_MIME_TYPE = 'application/octet-stream'


class Attachment:
    """A file waiting to be inlined. Content is read only after the size check."""

    def __init__(self, name, mime_type, size, read):
        self.name = name
        self.mime_type = mime_type or DEFAULT_MIME_TYPE
        self.size = size
        self._read = read

    @classmethod
    def from_bytes(cls, name, content, mime_type=None):
        mime_type = mime_type or mimetypes.guess_type(name)[0]
        return cls(name, mime_type, len(content), lambda: content)

    @classmethod
    def from_path(cls, path, mime_type=None):
        name = os.path.basename(path)
        mime_type = mime_type or mimetypes.guess_type(name)[0]

        def read():
            with open(path, 'rb') as f:
                return f.read()

        return cls(name, mime_type, os.path.getsize(path), read)

    @classmethod
    def from_upload(cls, storage):
        """From a werkzeug FileStorage (Flask request.files entry)"""
        stream = storage.stream
        stream.seek(0, os.SEEK_END)
        size = stream.tell()
        stream.seek(0)
        mime_type = storage.mimetype or mimetypes.guess_type(storage.filename or '')[0]
        return cls(storage.filename, mime_type, size, stream.read)

    def read(self):
        return self._read()

    def to_payload(self):
        return {
            'name': self.name,
            'mimeType': self.mime_type,
            'data': base64.b64encode(self.read()).decode('ascii'),
        }


def check_file_sizes(attachments, limit=MAX_FILE_SIZE):
    for attachment in attachments:
        if attachment.size > limit:
            size_mb = attachment.size / (1024 * 1024)
            raise ValidationError(
                f"File '{attachment.name}' is {size_mb:.1f} MB, over the "
                f"{limit // (1024 * 1024)} MB limit. Please upload it somewhere "
                f"and submit a link instead."
            )


def build_submission(fields, attachments=None, link=None):
    """
    Validate an order and return the body for POST /order.

    Args:
        fields (dict): order fields using wire names (name, email, phone, ...)
        attachments (list[Attachment]): files to inline, may be empty
        link (str): external link used instead of (or with no) attachments

    Raises:
        ValidationError: missing fields, no file and no link, or an oversized file
    """
    attachments = [a for a in (attachments or []) if a is not None and a.name]
    link = (link or '').strip()

    body = {}
    for key in REQUIRED_FIELDS:
        value = fields.get(key)
        body[key] = value.strip() if isinstance(value, str) else value

    # Validate with placeholders so file content is only read once
    probe = dict(body)
    if attachments:
        probe['files'] = [a.name for a in attachments]
    if link:
        probe['link'] = link
    validate_order_fields(probe, require_attachment=True)

    check_file_sizes(attachments)

    if attachments:
        body['files'] = [a.to_payload() for a in attachments]
    if link:
        body['link'] = link
    return body
