# ABOUTME: Path traversal checks for output directories and generated filenames
# ABOUTME: Keeps writes inside the directory the user asked for

import os

MAX_FILENAME_LENGTH = 255

UNSAFE_FILENAME_CHARACTERS = ("/", "\\", ":", "*", "?", '"', "<", ">", "|", "\n", "\r", "\t")

SUSPICIOUS_PATH_FRAGMENTS = ("..", "~", "$")


class PathTraversalError(ValueError):
    """Raised when a path would escape its permitted base directory."""


def validate_path(base: str, target: str) -> None:
    """Ensure ``target`` resolves to ``base`` or somewhere beneath it."""
    if not base:
        raise PathTraversalError("base path cannot be empty")
    if not target:
        raise PathTraversalError("target path cannot be empty")

    abs_base = os.path.abspath(os.path.normpath(base))
    abs_target = os.path.abspath(os.path.normpath(target))

    if not abs_base.endswith(os.sep):
        abs_base += os.sep
    if not (abs_target + os.sep).startswith(abs_base):
        raise PathTraversalError(
            f"path traversal detected: target path {target!r} is outside base directory {base!r}"
        )


def validate_output_path(output_dir: str, filename: str) -> None:
    """Ensure ``filename`` joined onto ``output_dir`` stays inside it."""
    if not output_dir:
        raise PathTraversalError("output directory cannot be empty")
    if not filename:
        raise PathTraversalError("filename cannot be empty")
    if ".." in filename:
        raise PathTraversalError(f"filename contains directory traversal sequence: {filename}")
    if os.path.isabs(filename):
        raise PathTraversalError(f"filename cannot be an absolute path: {filename}")

    validate_path(output_dir, os.path.join(output_dir, filename))


def sanitize_filename(filename: str) -> str:
    """Replace path and shell metacharacters so ``filename`` is a single safe name."""
    if not filename:
        return "unnamed"

    result = filename
    for char in UNSAFE_FILENAME_CHARACTERS:
        result = result.replace(char, "_")
    result = result.strip(". ")

    if not result or set(result) == {"_"}:
        return "unnamed"
    return result[:MAX_FILENAME_LENGTH]


def is_path_safe(path: str) -> bool:
    """Quick screen for relative paths free of traversal and expansion syntax."""
    if not path:
        return False

    clean = os.path.normpath(path)
    if any(fragment in clean for fragment in SUSPICIOUS_PATH_FRAGMENTS):
        return False
    return not os.path.isabs(clean)
