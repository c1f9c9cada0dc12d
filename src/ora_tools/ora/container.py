"""
Named blob stores holding OpenRaster entries.

An OpenRaster file is a zip archive; :py:class:`ZipContainer` reads it.
:py:class:`MappingContainer` keeps blobs in memory for callers that already
hold them.
"""

import logging
import os
import zipfile
from typing import BinaryIO, Mapping, Protocol, Union, runtime_checkable

from ora_tools.errors import NotFoundError

logger = logging.getLogger(__name__)


@runtime_checkable
class Container(Protocol):
    """
    Named blob store.

    .. py:method:: get(name)

        Return the raw bytes of the named entry, or raise
        :py:class:`~ora_tools.errors.NotFoundError`.

    .. py:method:: list()

        Return the names of all entries, excluding directories.
    """

    def get(self, name: str) -> bytes: ...

    def list(self) -> list[str]: ...


class ZipContainer:
    """
    Zip-backed container.

    Example::

        with ZipContainer('image.ora') as container:
            manifest = container.get('stack.xml')
    """

    def __init__(self, fp: Union[BinaryIO, str, bytes, os.PathLike]):
        if isinstance(fp, bytes):
            fp = os.fsdecode(fp)
        try:
            self._zip = zipfile.ZipFile(fp)
        except FileNotFoundError as e:
            raise NotFoundError("Container not found: %s" % fp) from e
        except zipfile.BadZipFile as e:
            raise NotFoundError("Not a valid container: %s" % e) from e

    def get(self, name: str) -> bytes:
        try:
            info = self._zip.getinfo(name)
        except KeyError as e:
            raise NotFoundError("Entry not found: %s" % name) from e
        if info.is_dir():
            raise NotFoundError("Entry is a directory: %s" % name)
        return self._zip.read(info)

    def list(self) -> list[str]:
        return [info.filename for info in self._zip.infolist() if not info.is_dir()]

    def close(self) -> None:
        self._zip.close()

    def __enter__(self) -> "ZipContainer":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return "%s(%r)" % (self.__class__.__name__, self._zip.filename)


class MappingContainer:
    """In-memory container backed by a name to bytes mapping."""

    def __init__(self, entries: Mapping[str, bytes]):
        self._entries = dict(entries)

    def get(self, name: str) -> bytes:
        try:
            return self._entries[name]
        except KeyError as e:
            raise NotFoundError("Entry not found: %s" % name) from e

    def list(self) -> list[str]:
        return [name for name in self._entries if not name.endswith("/")]

    def close(self) -> None:
        pass

    def __repr__(self) -> str:
        return "%s(entries=%d)" % (self.__class__.__name__, len(self._entries))
