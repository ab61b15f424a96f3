# shrs

A framework for building and configuring your own interactive shell on POSIX
systems.

You assemble a shell from parts: aliases, environment variables, builtin
commands, hooks that run on shell events, a command language, history,
keybindings, a colour theme, a typed state store and plugins. Every part has a
default, so the smallest working shell takes only a few lines.

## Installation

```
pip install .
```

## Running the default shell

```
shrs
```

This starts an interactive shell with a `> ` prompt, the default builtins
(`cd`, `export`, `alias`, `unalias`, `history`, `jobs`, `source`, `debug`,
`help`, `exit`) and the default command language. When standard input is a
terminal, the shell first takes control of it for job control
(`shrs.jobcontrol.initialize_job_control`). The shell ends on `exit` or at the
end of input (Ctrl-D).

A line whose first word names a builtin runs that builtin. Any other line goes
to the command language. The default language starts external programs. It
connects them with `|` and runs a pipeline in the background when it is
followed by `&`. The language waits for a foreground pipeline to finish. A line
that ends in a backslash, or has an open quote or bracket, is continued on the
next line (`shrs.linecheck.needs_line_check`).

## Building your own shell

```python
from shrs.alias import Alias
from shrs.env import Env
from shrs.shell import ShellBuilder

alias = Alias([("l", "ls"), ("la", "ls -a"), ("g", "git")])

env = Env()
env.load()
env.set("EDITOR", "vim")

myshell = ShellBuilder().with_alias(alias).with_env(env).build()
myshell.run()
```

`ShellBuilder` also offers `with_hooks`, `with_builtins`, `with_readline`,
`with_theme`, `with_lang`, `with_plugin`, `with_state`, `with_history` and
`with_keybinding`. Anything not given gets its default.

### Conditional aliases

A name may carry several aliases. When a line is read, the last alias whose
rule accepts the context replaces the first word.

```python
from shrs.alias import Alias, AliasInfo
from shrs.prompt import top_pwd

alias = Alias()
alias.set("inhome", AliasInfo.with_rule("true", lambda ctx: top_pwd() == "~"))
alias.set("inhome", AliasInfo.with_rule("false", lambda ctx: top_pwd() != "~"))
```

### Hooks

Hooks are keyed by the type of context they receive: `StartupCtx`,
`BeforeCommandCtx`, `AfterCommandCtx`, `ChangeDirCtx` and `JobExitCtx`.

```python
from shrs.hooks import Hooks, ChangeDirCtx

def announce(sh, sh_ctx, sh_rt, ctx):
    print(f"moved from {ctx.old_dir} to {ctx.new_dir}")

hooks = Hooks.default()
hooks.insert(ChangeDirCtx, announce)
```

Pass them in with `ShellBuilder().with_hooks(hooks)`.

### History

`DefaultHistory` keeps history in memory. `FileBackedHistory(path)` keeps it in
a file with one entry per line, most recent first, and drops duplicates each
time it writes. The `history` builtin lists, searches, clears or reruns
entries.

### Keybindings

```python
from shrs.keybinding import DefaultKeybinding, KeyEvent, parse_keybinding

bindings = DefaultKeybinding()
bindings.bind("C-l", lambda sh, ctx, rt: print("\x1b[2J"), "Clear the screen")
print(parse_keybinding("Ctrl-Shift-c"))
```

`handle_key_event(sh, ctx, rt, KeyEvent(...))` runs the matching callback. The
`help bindings` builtin lists the descriptions.

### Plugins

Subclass `shrs.plugin.Plugin`, implement `init(shell)` and optionally `meta()`
and `fail_mode()`, then register it with `ShellBuilder().with_plugin(...)`.
Plugins are initialized in the order they were added when `run()` is called. A
failing plugin whose fail mode is `FailMode.WARN` only logs a warning. One
whose fail mode is `FailMode.ABORT`, which is the default, makes `run()` raise
`RuntimeError`.

### Custom builtins

Subclass `shrs.builtins.base.BuiltinCmd` and implement
`run(sh, ctx, rt, args)` so that it returns a `CmdOutput`. Then register it
with `Builtins.insert(name, builtin)`, starting from `Builtins.default()` or an
empty `Builtins()`.

### Command language

`shrs.lexer.Lexer` tokenizes a command line. `shrs.syntax` defines the command
tree. `shrs.evaluate.eval_command` starts the processes of a tree and
`run_job` hands them to a `shrs.job.JobManager`. To use a language of your own,
subclass `shrs.lang.Lang` and pass it to `with_lang`.

## What it does not do

- The default language understands only plain words, `|` and `&`. It has no
  redirections, `;`, `&&`, `||`, `!`, subshells, `if`, `while`, `until`,
  `for`, `case` or function definitions, and it does not expand variables or
  `~`. `shrs.syntax` can describe these, but `eval_command` raises
  `ValueError` for anything other than simple commands, pipelines,
  asynchronous lists and no-ops.
- The default line reader (`PromptReadline`) uses plain `input()`. It offers
  no line editing, completion or keybinding dispatch, so keybindings run only
  when your own readline calls `handle_key_event`.
- The `jobs` builtin lists the jobs tracked in `Context.jobs`. Background
  pipelines started by the default language are tracked by the shell's
  `JobManager` instead.

## Testing

```
pip install .[test]
pytest
```