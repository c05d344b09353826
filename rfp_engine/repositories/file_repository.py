"""Repository for files attached to proposals.

Payloads are kept inline as ``data:<mime>;base64,<payload>`` URLs.
"""

import asyncio
import base64
import mimetypes
from pathlib import Path
from typing import List, Optional, Union

from ..store_schema import EntityKind, ProposalFile, now_iso
from ..utils import get_logger
from .base import BaseRepository, find_by_id

logger = get_logger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


def to_data_url(content: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def guess_mime_type(name: str) -> str:
    mime_type, _ = mimetypes.guess_type(name)
    return mime_type or DEFAULT_MIME_TYPE


class FileRepository(BaseRepository):
    """Repository for ProposalFile records."""

    def list(self, proposal_id: int) -> List[ProposalFile]:
        return [f for f in self.snapshot.proposal_files if f.proposal_id == proposal_id]

    def get(self, file_id: int) -> Optional[ProposalFile]:
        return find_by_id(self.snapshot.proposal_files, file_id)

    def add(self, proposal_id: int, name: str, mime_type: str, size: int, data: str) -> ProposalFile:
        """
        Attach an already-encoded payload.

        Args:
            proposal_id: Owning proposal (must exist)
            name: Original file name
            mime_type: MIME type
            size: Size of the original content in bytes
            data: Encoded payload as stored

        Returns:
            Created ProposalFile
        """
        with self.store.transaction("file.add") as snapshot:
            record = ProposalFile(
                id=self.store.allocator(snapshot).next_id(EntityKind.FILE),
                proposal_id=proposal_id,
                name=name,
                type=mime_type,
                size=size,
                data=data,
                created_at=now_iso(),
            )
            snapshot.proposal_files.append(record)

        logger.info(f"Attached file {record.id} ({name}, {size} bytes) to proposal {proposal_id}")
        return record

    def add_bytes(self, proposal_id: int, name: str, content: bytes, mime_type: Optional[str] = None) -> ProposalFile:
        mime_type = mime_type or guess_mime_type(name)
        return self.add(proposal_id, name, mime_type, len(content), to_data_url(content, mime_type))

    def add_from_path(self, proposal_id: int, path: Union[str, Path], mime_type: Optional[str] = None) -> ProposalFile:
        path = Path(path)
        return self.add_bytes(proposal_id, path.name, path.read_bytes(), mime_type)

    async def add_async(self, proposal_id: int, path: Union[str, Path], mime_type: Optional[str] = None) -> ProposalFile:
        """
        Read a file off the event loop, then attach it.

        The record is only allocated and committed once the read has
        finished, so callers never observe a partially written attachment.
        """
        path = Path(path)
        content = await asyncio.to_thread(path.read_bytes)
        return self.add_bytes(proposal_id, path.name, content, mime_type)

    def remove(self, file_id: int) -> bool:
        if self.get(file_id) is None:
            return False
        with self.store.transaction("file.remove") as snapshot:
            snapshot.proposal_files = [f for f in snapshot.proposal_files if f.id != file_id]
        logger.info(f"Removed file: {file_id}")
        return True
