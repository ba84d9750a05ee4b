# fileserve

`fileserve` is a small TCP server that exposes one root directory to
clients. Each connection carries one text command. The server runs that
command against the files under the root and sends back one reply. The reply
starts with a status byte and may carry a message after it.

## Installation

```
pip install .
```

To install the test dependencies as well, run `pip install .[test]`.

## Running the server

```
fileserve --root_path /srv/shared --address 127.0.0.1 --port 8000
```

`python -m fileserve.cli` accepts the same options.

You can leave out any of the options:

- `--root_path` defaults to the directory that holds the program being run.
- `--address` defaults to `127.0.0.1`.
- `--port` defaults to `8000`. The value must consist of digits only.

The command ignores arguments that are not one of these options.

The command prints a message instead of starting in these cases:

- an option has no value after it;
- `--port` is not a number;
- the root directory does not exist;
- the socket cannot be created, bound or put into listening mode.

Once the server has started, it runs until a line is read from standard
input, for example when you press Enter. The server then stops.

## Protocol

A client opens a connection and sends one request. The request is a block of
up to `buffer_size` bytes, 1024 by default. It holds a command and its
arguments, separated by spaces. The server ignores repeated spaces. Anything
after the first zero byte is also ignored.

The server reads a full block, or reads until the client closes its side, then
answers. Every reply is padded with zero bytes to `buffer_size`. The server
closes the connection after it sends the reply.

The first byte of every reply is a `ResponseStatus`:

| Code | Name                       |
|------|----------------------------|
| 1    | `OK`                       |
| 2    | `BAD_REQUEST`              |
| 3    | `INCORRECT_ARGUMENTS`      |
| 4    | `INCORRECT_COMMAND`        |
| 5    | `COMMAND_CANT_BE_EXECUTED` |
| 128  | `SERVER_ERROR`             |

The status byte is followed by a message:

- A command that fails because of the state of the file system gets status 5,
  with a reason such as `File don't exists` or `Directory already exists`.
- Any other operating-system error gets status 128 with `Unknown error`.

### Commands

Each path is appended to the root directory and then normalised.

- `show_files <dir>`
  - Lists the entries of a directory.
  - Each entry appears as `directory <name> ` or `file <name> `.
- `delete <path>`
  - Removes a file or an empty directory.
- `create_file <path> <length>`
  - Creates a new file.
  - The file's text follows in `ceil(length / buffer_size)` further blocks.
  - In each block, only the part before the first zero byte is used.
  - The text is stored followed by a newline.
- `rewrite_file <path> <length>`
  - Works like `create_file`, but the file must already exist.
- `create_or_rewrite_file <path> <length>`
  - Writes the file whether or not it already exists.
- `change_file_data <path> [--name <new name>]`
  - Renames a file within its own directory.
  - Without `--name`, it only checks that the file exists.
- `change_directory_data <path> [--name <new name>]`
  - Works like `change_file_data`, for a directory.
- `replace_file <old path> <new path>`
  - Moves a file.
  - The new path must not exist, and its parent directory must exist.
- `create_directory <path>`
  - Creates a directory and any parents it needs.

## Using it from Python

```python
from fileserve.server import Server

with Server("/srv/shared", "127.0.0.1", 8000, 1024) as server:
    input("Press Enter to stop\n")
```

`Server.start()` raises a subclass of `StartError` when it fails:

- `BaseDirectoryMissingError`
- `AlreadyStartedError`
- `SocketCreationError`
- `BindingError`
- `ListeningError`

After a successful start, `server.port` holds the port that was actually
bound. This means port `0` picks a free port. `make_response(error, message)`
builds the reply bytes for the outcome of a file system command.

You can also use the file operations on their own, through
`fileserve.filesystem`:

```python
from fileserve import filesystem

filesystem.create_directory("/tmp/demo")
filesystem.create_file("/tmp/demo/notes.txt", "hello")
for entry in filesystem.list_entries("/tmp/demo"):
    print(entry.name, entry.is_directory)
```

A failed operation raises a subclass of `filesystem.FileSystemError`, such as
`FileMissingError` or `DirectoryExistsAlreadyError`. The helpers in
`fileserve.textutil` split requests and check numbers:

- `split`
- `split_nonempty`
- `is_number`
- `div_round_up`

## What it does not do

- The package does not include a client. Requests must be sent with your own
  socket code.
- There is no authentication.
- Paths are not confined to the root directory. A path with `..` can reach
  files outside it.