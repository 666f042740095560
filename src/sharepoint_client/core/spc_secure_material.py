# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""
Lifecycle tracking for decrypted credential material.

Raw PKCS#12/PEM bytes are read straight into ``bytearray`` buffers that are
zero-filled on release. Files are only written through
``write_temp_file`` for collaborators that insist on a path; they are created
with ``mkstemp`` (unique name, mode 0600) and unlinked on release.

Release happens explicitly, on context-manager exit, when the owner is garbage
collected and, at the latest, at interpreter exit (``weakref.finalize``).

Erasure covers these buffers only. Passphrase strings and key bytes supplied
by the caller are immutable and stay untouched. The parsed private key lives
inside OpenSSL until its key object is collected.
"""

import os
import tempfile
import threading
import weakref
from typing import Union

from sharepoint_client.core import spc_logger


def _release_artifacts(buffers: list, paths: list) -> None:
    # Lists are shared with the finalizer, so they are emptied in place.
    while buffers:
        buffer = buffers.pop()
        buffer[:] = bytes(len(buffer))
        del buffer[:]

    while paths:
        path = paths.pop()
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            spc_logger.log_warning(f"Could not delete temporary key material {path}: {e}")


class SecureMaterial:
    def __init__(self):
        self._buffers: list[bytearray] = []
        self._paths: list[str] = []
        self._lock = threading.Lock()
        self._finalizer = weakref.finalize(
            self, _release_artifacts, self._buffers, self._paths
        )

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.release()

    @property
    def artifact_count(self) -> int:
        return len(self._buffers) + len(self._paths)

    @property
    def paths(self) -> tuple:
        return tuple(self._paths)

    def register_buffer(self, data: Union[bytes, bytearray]) -> bytearray:
        """Copy ``data`` into a tracked buffer and return the buffer."""
        buffer = bytearray(data)
        with self._lock:
            self._buffers.append(buffer)
        return buffer

    def allocate_buffer(self, size: int) -> bytearray:
        """Return a tracked zero-filled buffer of ``size`` bytes."""
        buffer = bytearray(size)
        with self._lock:
            self._buffers.append(buffer)
        return buffer

    def register_path(self, path: str) -> str:
        with self._lock:
            self._paths.append(path)
        return path

    def write_temp_file(
        self, data: Union[bytes, bytearray], prefix: str = "spc_key_", suffix: str = ".pem"
    ) -> str:
        fd, path = tempfile.mkstemp(prefix=prefix, suffix=suffix)
        # Track before writing so a failed write still gets cleaned up.
        self.register_path(path)
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        spc_logger.log_debug(f"Materialized temporary key file {path}")
        return path

    def release(self) -> None:
        with self._lock:
            count = self.artifact_count
            _release_artifacts(self._buffers, self._paths)
        if count:
            spc_logger.log_debug(f"Released {count} key material artifact(s)")
