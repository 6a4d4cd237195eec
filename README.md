# minishell

A small interactive shell that runs on top of an in-memory filesystem.
Files and directories exist only for the length of a session. The file
table has a fixed number of slots, and each file has a fixed amount of
storage.

## Installing

```
pip install .
```

## Running

```
minishell
```

The prompt shows the current directory. It is `/$ ` at the root and
`/docs$ ` after `cd docs`. Backspace and Delete erase the last typed
character. The shell stops when its input ends.

## Commands

| Command | What it does |
|---|---|
| `ls` | lists the names in the current directory, each followed by a space; arguments are ignored |
| `cat [file ...]` | prints the named files; with `< file`, prints that file; with neither, echoes typed lines until Ctrl+D on an empty line |
| `rm file ...` | removes regular files; unknown names are ignored and directories are refused |
| `mkdir dir ...` | creates directories in the current directory |
| `cd dir` / `cd ..` | moves into a child directory, or up to the parent |

Any other command name prints `<name>: command not found`.

## Redirections

* `> file` sends standard output to `file` and empties the file first
* `>> file` appends standard output to `file`
* `2> file` and `2>> file` do the same for standard error
* `< file` reads standard input from `file`

The file name may follow the operator directly (`>notes`) or after a
space (`> notes`). A file named after `>` or `>>` is created if it does
not exist. Redirections apply to one command only.

```
/$ cat > notes
hello
^D
/$ cat >> notes
world
^D
/$ cat notes
hello
world
/$ mkdir docs
/$ ls
notes docs
```

## Limits

With the default settings the file table has 1024 slots and each file
holds at most 1024 bytes. A write past that limit is cut short. A
directory uses 8 bytes of its storage for each entry, so the same limit
caps how many entries it can hold. Creating a file in a full directory,
or when every slot is taken, fails with `memory is full`. Sixteen
descriptors exist, and three of them are the standard streams.

## Errors

Errors follow the usual shell wording, for example
`cat: missing: no such file or directory` or `mkdir: docs: file exists`.
Errors raised by the shell itself start with `-bash: `. These are a
failed redirection and the errors of `cd`, for example
`-bash: cd: notes: is not a directory`.

## Using it from Python

```python
import io
from minishell.console import Console
from minishell.filesystem import FileSystem
from minishell.shell import Shell

out = io.StringIO()
console = Console(io.StringIO(""), out)
shell = Shell(console, FileSystem(console, 1024, 1024 * 1024, 16))
shell.execute("mkdir docs")
shell.execute("ls")
print(out.getvalue())   # "docs \n"
```

* `Shell.execute(line)` runs one command line.
* `Shell.run()` prompts for commands, reads them and runs them until the
  console input runs out.
* `Shell.parse(line)` returns a `ParsedCommand` that holds the command,
  its arguments and its redirections.
* `FileSystem` offers `open`, `read`, `write`, `close`, `find`,
  `create`, `listdir`, `remove` and `redirect`. Failures raise
  `FileSystemError`, which carries an `errno` value in `err_code`.
* `minishell.errors.format_shell_error` builds the error lines shown
  above.

## What it does not do

* Nothing is stored on disk. All files are lost when the shell exits.
* It runs no external programs. Only the five commands above exist.
* There are no pipes, no quoting and no globbing.
* `cd` takes a single name in the current directory or `..`. Paths with
  `/` are not understood, and `cd` with no argument is an error rather
  than a move to a home directory.
* `ls` lists the current directory only.