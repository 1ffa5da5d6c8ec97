"""Multipart encoding of campaign drafts.

A draft is always sent as multipart/form-data, whether or not a file is
attached:

- every text field is one text part named after its camelCase field name
- the platform selection is one text part holding a JSON object
- the attachment, if any, is a file part named "attachment"

encode_multipart returns the parts in the list-of-tuples form accepted by
httpx's ``files=`` argument. Text parts are UTF-8 bytes with a None filename,
so they are sent as plain form fields.
"""

import json
from typing import List, Optional, Tuple

from campaignform.models import CampaignDraft

ATTACHMENT_PART = "attachment"
PLATFORM_PART = "platform"

MultipartPart = Tuple[str, Tuple[Optional[str], bytes, Optional[str]]]


def encode_platform(draft: CampaignDraft) -> str:
    """JSON text of the platform flags.

    Examples:
        >>> encode_platform(CampaignDraft())
        '{"instagram": false, "facebook": false, "youtube": false}'
    """
    return json.dumps(draft.platform.to_dict())


def encode_multipart(draft: CampaignDraft) -> List[MultipartPart]:
    """Build the multipart parts for a draft, in form order."""
    parts: List[MultipartPart] = []
    for name, value in draft.to_dict().items():
        if name == PLATFORM_PART:
            parts.append((name, (None, encode_platform(draft).encode("utf-8"), None)))
        else:
            parts.append((name, (None, value.encode("utf-8"), None)))

    attachment = draft.attachment
    if attachment is not None:
        parts.append(
            (ATTACHMENT_PART, (attachment.filename, attachment.content, attachment.content_type))
        )
    return parts


__all__ = [
    "ATTACHMENT_PART",
    "PLATFORM_PART",
    "encode_platform",
    "encode_multipart",
]
