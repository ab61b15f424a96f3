"""Builtin shell commands with access to the shell's context, and their registry."""