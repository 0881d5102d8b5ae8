"""
Checks on the `regex` library features the PipeGrep engine builds on.

- POSIX leftmost-longest matching for the extended dialect
- POSIX bracket classes such as [[:digit:]]
- Escaping of text and byte patterns for the fixed dialect
- Named groups and group metadata used for capture reporting
- Callable replacements on text and byte subjects
"""
