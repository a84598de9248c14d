"""Zip archive extraction."""

from __future__ import annotations

import logging
import zipfile

from synapps.domain.errors import IOFailureError

from .file import File, decode_os_file_name

logger = logging.getLogger(__name__)


def extract_to(zip_file: File, target_directory: File) -> None:
    """Extract the whole content of a Zip archive into a directory.

    The archive's consistency is checked before anything is written. The
    target directory (and its parents) is created if missing.

    Args:
        zip_file: The archive.
        target_directory: Destination directory.

    Raises:
        IOFailureError: If the archive cannot be opened, is corrupt, or its
            content cannot be extracted.
    """
    try:
        # Opened by hand: zipfile takes a bytes path for a file object.
        stream = open(zip_file.get_os_path(), "rb")  # pylint: disable=consider-using-with
    except OSError as err:
        raise IOFailureError(
            f"Cannot open ZIP archive ({err}): {zip_file.get_path()}", path=zip_file.get_path()
        ) from err

    with stream:
        try:
            archive = zipfile.ZipFile(stream)
        except (OSError, zipfile.BadZipFile) as err:
            raise IOFailureError(
                f"Cannot open ZIP archive ({err}): {zip_file.get_path()}", path=zip_file.get_path()
            ) from err

        with archive:
            try:
                bad_member = archive.testzip()
            except (OSError, zipfile.BadZipFile) as err:
                bad_member, cause = "<unreadable>", err
            else:
                cause = None
            if bad_member is not None:
                raise IOFailureError(
                    f"Cannot open ZIP archive (corrupt member {bad_member}): {zip_file.get_path()}",
                    path=zip_file.get_path(),
                ) from cause

            target_directory.create_directory(recursive=True)
            target = decode_os_file_name(target_directory.get_os_path(), target_directory.host)
            try:
                archive.extractall(target)
            except (OSError, zipfile.BadZipFile) as err:
                raise IOFailureError(
                    f"Cannot extract content of ZIP archive: {zip_file.get_path()}",
                    path=zip_file.get_path(),
                ) from err
    logger.debug("Extracted %s into %s", zip_file.get_path(), target_directory.get_path())
