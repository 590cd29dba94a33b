"""Bulk upload — write a batch of local files or a zip archive into a directory.

Uploads go through :class:`FileWriter` one file at a time, so each one gets
its own commit and its own read-before-write conflict check.  A failure
stops the batch; files already written stay written.
"""

from __future__ import annotations

import io
import logging
import zipfile
from typing import Iterable

from repo_workbench.domain.entities import WriteResult
from repo_workbench.domain.exceptions import UnsupportedEncodingError
from repo_workbench.domain.value_objects import RepositoryRef, base_name, join_path
from repo_workbench.services.file_filter import (
    is_archive_path,
    is_commit_analyzable,
    is_extractable_path,
    should_skip_archive_member,
)
from repo_workbench.services.file_writer import FileWriter
from repo_workbench.services.text_generation import TextGenerator

logger = logging.getLogger(__name__)


class BulkUploader:
    def __init__(self, writer: FileWriter, text: TextGenerator) -> None:
        self._writer = writer
        self._text = text

    async def upload_files(
        self,
        repo: RepositoryRef,
        base_path: str,
        files: Iterable[tuple[str, bytes]],
        branch: str,
    ) -> list[WriteResult]:
        """Write each ``(relative_path, data)`` pair under *base_path* on *branch*."""
        results: list[WriteResult] = []
        for relative_path, data in files:
            name = base_name(relative_path)
            message = f"upload {name}"
            if is_commit_analyzable(name, len(data)):
                message = await self._text.suggest_commit_message(
                    name, data.decode("utf-8", errors="replace")
                )
            results.append(
                await self._writer.write(repo, join_path(base_path, relative_path), data, message, branch)
            )
        logger.info("Uploaded %d file(s) to %s:%s@%s", len(results), repo.full_name, base_path or "/", branch)
        return results

    async def upload_archive(
        self,
        repo: RepositoryRef,
        base_path: str,
        filename: str,
        data: bytes,
        branch: str,
        *,
        extract: bool,
    ) -> list[WriteResult]:
        """Upload *filename* as-is, or unpack it and upload each member."""
        if not is_archive_path(filename):
            raise UnsupportedEncodingError(f"'{filename}' is not a .zip or .rar archive.")
        if extract and not is_extractable_path(filename):
            raise UnsupportedEncodingError(
                f"'{filename}' cannot be extracted; only .zip archives are unpacked."
            )
        if not extract:
            result = await self._writer.write(
                repo,
                join_path(base_path, base_name(filename)),
                data,
                f"chore: upload archive {base_name(filename)}",
                branch,
            )
            return [result]

        try:
            archive = zipfile.ZipFile(io.BytesIO(data))
        except zipfile.BadZipFile as exc:
            raise UnsupportedEncodingError(f"'{filename}' is not a readable zip archive.") from exc

        results: list[WriteResult] = []
        with archive:
            # All targets are resolved before the first write.
            members = [
                (info, join_path(base_path, info.filename))
                for info in archive.infolist()
                if not info.is_dir() and not should_skip_archive_member(info.filename)
            ]
            logger.info("Extracting %d file(s) from %s", len(members), filename)
            for info, target in members:
                results.append(
                    await self._writer.write(
                        repo,
                        target,
                        archive.read(info),
                        f"chore: upload extracted {info.filename}",
                        branch,
                    )
                )
        return results
