"""In-memory file table, descriptor table and the system calls over them."""

from __future__ import annotations

import enum
import errno
from dataclasses import dataclass, field

from .console import Console
from .errors import error_message

NUM_FILES = 1024
MAX_FD = 16
MAX_NAME = 32
POINTER_SIZE = 8
DEFAULT_STORAGE_SIZE = 1024 * 1024
STANDARD_STREAMS = 3


class FileSystemError(Exception):
    """A failed file-system operation, carrying an errno value."""

    def __init__(self, err_code: int, name: str | None = None):
        self.err_code = err_code
        self.name = name
        message = error_message(err_code)
        super().__init__(f"{name}: {message}" if name is not None else message)


class FileType(enum.Enum):
    REGULAR = "regular"
    DIRECTORY = "directory"


class OpenFlags(enum.IntFlag):
    RDONLY = 0
    WRONLY = 0x0001
    RDWR = 0x0002
    APPEND = 0x0008
    CREAT = 0x0200
    TRUNC = 0x0400


_ACCESS_MASK = int(OpenFlags.WRONLY | OpenFlags.RDWR)


@dataclass(eq=False)
class FileEntry:
    """One slot of the file table."""

    name: str = ""
    file_type: FileType = FileType.REGULAR
    parent: FileEntry | None = None
    in_use: bool = False
    data: bytearray = field(default_factory=bytearray)
    children: list[FileEntry] = field(default_factory=list)

    @property
    def is_dir(self) -> bool:
        return self.file_type is FileType.DIRECTORY

    @property
    def size(self) -> int:
        """Bytes used: file contents, or one pointer per child of a directory."""
        if self.is_dir:
            return len(self.children) * POINTER_SIZE
        return len(self.data)

    def assign(self, name: str, file_type: FileType, parent: FileEntry) -> None:
        self.in_use = True
        self.name = name
        self.file_type = file_type
        self.parent = parent
        self.data = bytearray()
        self.children = []


@dataclass
class FileDescriptor:
    """An open instance of a file; ``entry`` is None for the console."""

    entry: FileEntry | None = None
    offset: int = 0
    flags: OpenFlags = OpenFlags.RDONLY


class FileSystem:
    """A fixed-size table of files with a tree of directories and open descriptors."""

    def __init__(
        self,
        console: Console,
        num_files: int = NUM_FILES,
        storage_size: int = DEFAULT_STORAGE_SIZE,
        max_fd: int = MAX_FD,
    ):
        if num_files < 1:
            raise ValueError("the file table needs at least one slot")
        if max_fd < STANDARD_STREAMS:
            raise ValueError(f"at least {STANDARD_STREAMS} descriptors are required")
        self.console = console
        self.max_file_size = storage_size // num_files
        self.table = [FileEntry() for _ in range(num_files)]
        self.root = self.table[0]
        self.root.assign("", FileType.DIRECTORY, self.root)
        self.cwd = self.root
        self.descriptors = [FileDescriptor() for _ in range(max_fd)]

    # -- directory operations -------------------------------------------------

    def find(self, name: str) -> FileEntry | None:
        """Return the live child of the current directory called ``name``."""
        return next(
            (child for child in self.cwd.children if child.in_use and child.name == name),
            None,
        )

    def create(self, name: str, file_type: FileType) -> FileEntry:
        """Take a free table slot and link it into the current directory."""
        if self.cwd.size + POINTER_SIZE > self.max_file_size:
            raise FileSystemError(errno.ENOSPC, name)
        entry = next((slot for slot in self.table if not slot.in_use), None)
        if entry is None:
            raise FileSystemError(errno.ENOSPC, name)
        entry.assign(name, file_type, self.cwd)
        self.cwd.children.append(entry)
        return entry

    def listdir(self) -> list[str]:
        """Names of the live entries in the current directory, in creation order."""
        return [child.name for child in self.cwd.children if child.in_use]

    def remove(self, name: str) -> bool:
        """Delete a regular file; return False if nothing has that name."""
        entry = self.find(name)
        if entry is None:
            return False
        if entry.is_dir:
            raise FileSystemError(errno.EISDIR, name)
        entry.in_use = False
        entry.data = bytearray()
        if entry.parent is not None and entry in entry.parent.children:
            entry.parent.children.remove(entry)
        return True

    # -- descriptors ----------------------------------------------------------

    def is_active(self, fd: int) -> bool:
        if not 0 <= fd < len(self.descriptors):
            return False
        if fd < STANDARD_STREAMS:
            return True
        return self.descriptors[fd].entry is not None

    def open(self, name: str, flags: OpenFlags | int) -> int:
        """Open ``name`` in the current directory and return a new descriptor."""
        if name is None:
            raise FileSystemError(errno.EFAULT)
        flags = OpenFlags(flags)
        fd = next(
            (
                number
                for number, descriptor in enumerate(self.descriptors)
                if number >= STANDARD_STREAMS and descriptor.entry is None
            ),
            None,
        )
        if fd is None:
            raise FileSystemError(errno.EMFILE, name)

        entry = self.find(name)
        if entry is None:
            if not flags & OpenFlags.CREAT:
                raise FileSystemError(errno.ENOENT, name)
            entry = self.create(name, FileType.REGULAR)

        if entry.is_dir:
            raise FileSystemError(errno.EISDIR, name)
        if flags & OpenFlags.TRUNC:
            entry.data = bytearray()

        offset = entry.size if flags & OpenFlags.APPEND else 0
        self.descriptors[fd] = FileDescriptor(entry, offset, flags)
        return fd

    def close(self, fd: int) -> None:
        """Release a descriptor; the standard streams cannot be closed."""
        if not self.is_active(fd) or fd < STANDARD_STREAMS:
            raise FileSystemError(errno.EBADF)
        self.descriptors[fd] = FileDescriptor()

    def read(self, fd: int, size: int) -> bytes:
        """Read up to ``size`` bytes; unredirected stdin reads from the console."""
        if size < 0:
            raise FileSystemError(errno.EINVAL)
        if not self.is_active(fd) or fd in (1, 2):
            raise FileSystemError(errno.EBADF)
        descriptor = self.descriptors[fd]
        entry = descriptor.entry
        if entry is None:
            chars = [self.console.read_char() for _ in range(size)]
            return "".join(chars).encode("utf-8")
        if int(descriptor.flags) & _ACCESS_MASK == OpenFlags.WRONLY:
            raise FileSystemError(errno.EBADF, entry.name)
        chunk = bytes(entry.data[descriptor.offset:descriptor.offset + size])
        descriptor.offset += len(chunk)
        return chunk

    def write(self, fd: int, data: bytes | str) -> int:
        """Write bytes and return how many fitted; unredirected stdout/stderr go to the console."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        data = bytes(data)
        if not self.is_active(fd) or fd == 0:
            raise FileSystemError(errno.EBADF)
        descriptor = self.descriptors[fd]
        entry = descriptor.entry
        if entry is None:
            self.console.write(data.decode("utf-8", errors="replace"))
            return len(data)
        if int(descriptor.flags) & _ACCESS_MASK == OpenFlags.RDONLY:
            raise FileSystemError(errno.EBADF, entry.name)

        if descriptor.flags & OpenFlags.APPEND:
            descriptor.offset = entry.size
        available = self.max_file_size - descriptor.offset
        count = min(len(data), available)
        if count <= 0:
            return 0
        entry.data[descriptor.offset:descriptor.offset + count] = data[:count]
        descriptor.offset += count
        return count

    # -- redirections ---------------------------------------------------------

    def redirect(self, target_fd: int, name: str, flags: OpenFlags | int) -> None:
        """Point a standard stream at the file ``name`` opened with ``flags``."""
        if not 0 <= target_fd < STANDARD_STREAMS:
            raise ValueError("only standard streams can be redirected")
        temp_fd = self.open(name, flags)
        source = self.descriptors[temp_fd]
        self.descriptors[target_fd] = FileDescriptor(source.entry, source.offset, source.flags)
        self.close(temp_fd)

    def reset_redirections(self) -> None:
        """Send all standard streams back to the console."""
        for fd in range(STANDARD_STREAMS):
            self.descriptors[fd] = FileDescriptor()

    def redirected(self, fd: int) -> FileEntry | None:
        """The file a descriptor refers to, or None when it is the console."""
        if not 0 <= fd < len(self.descriptors):
            raise FileSystemError(errno.EBADF)
        return self.descriptors[fd].entry