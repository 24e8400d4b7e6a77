"""
Path filters shared by every selection tier.

Classifies repository paths as noise, large dependency artifacts, binary or
media files, READMEs and tests. All checks are based on the path alone.
"""

import posixpath

# Infrastructure files that must never be filtered as dependencies
ALLOWED_INFRA_FILES = {
    "dockerfile",
    ".pre-commit-config.yaml",
}

LOCKFILE_NAMES = {
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "pipfile.lock",
    "gemfile.lock",
    "composer.lock",
    "cargo.lock",
    "go.sum",
    "poetry.lock",
    "mix.lock",
    "pubspec.lock",
}

ARCHIVE_EXTENSIONS = {
    ".zip",
    ".tar",
    ".gz",
    ".7z",
    ".rar",
    ".iso",
    ".exe",
    ".msi",
    ".dmg",
    ".deb",
    ".rpm",
    ".jar",
    ".war",
    ".ear",
    ".so",
    ".dll",
    ".dylib",
    ".bin",
    ".pkl",
    ".h5",
    ".xgb",
}

IMAGE_EXTENSIONS = {
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".svg",
    ".webp",
    ".bmp",
    ".tiff",
    ".ico",
    ".psd",
    ".ai",
}

MEDIA_EXTENSIONS = {
    ".mp3",
    ".wav",
    ".flac",
    ".mp4",
    ".mov",
    ".avi",
    ".mkv",
}

DOCUMENT_EXTENSIONS = {
    ".pdf",
    ".doc",
    ".docx",
    ".ppt",
    ".pptx",
    ".xls",
    ".xlsx",
}

# Substrings that mark generated or cached content
NOISE_INDICATORS = [
    ".log",
    ".tmp",
    ".cache",
    "node_modules",
    "__pycache__",
]

TEST_PATH_INDICATORS = [
    "/tests/",
    "/test_",
    "_test.",
]


def _basename(path: str) -> str:
    return posixpath.basename(path.rstrip("/")).lower()


def _extension(path: str) -> str:
    return posixpath.splitext(_basename(path))[1]


def is_large_dependency_file(path: str) -> bool:
    """
    Check if a path is a lockfile, stub or binary artifact.

    Such files cost tokens without adding evidence. Dockerfile and the
    pre-commit config are always allowed.
    """
    name = _basename(path)
    if name in ALLOWED_INFRA_FILES:
        return False

    if name == "__init__.py":
        return True
    if name in LOCKFILE_NAMES or name.endswith(".lock"):
        return True

    ext = _extension(path)
    return ext in ARCHIVE_EXTENSIONS or ext in IMAGE_EXTENSIONS


def is_binary_or_media(path: str) -> bool:
    """Check if a path is an archive, image, audio/video or office document."""
    ext = _extension(path)
    return (
        ext in ARCHIVE_EXTENSIONS
        or ext in IMAGE_EXTENSIONS
        or ext in MEDIA_EXTENSIONS
        or ext in DOCUMENT_EXTENSIONS
    )


def is_noise_path(path: str) -> bool:
    """Check if a path is a log, temp file, cache or vendored dependency."""
    lowered = path.lower()
    return any(indicator in lowered for indicator in NOISE_INDICATORS)


def is_readme(path: str) -> bool:
    """Check if a path is a README file at any depth."""
    return _basename(path).startswith("readme")


def find_readme(files: list[str]) -> str | None:
    """Return the shallowest README in the listing, if any."""
    readmes = [f for f in files if is_readme(f)]
    if not readmes:
        return None
    # Stable: first listed wins among equal depths
    return min(readmes, key=lambda p: p.strip("/").count("/"))


def is_test_path(path: str) -> bool:
    """Check if a path is a Python test module."""
    lowered = "/" + path.lower()
    if not lowered.endswith(".py"):
        return False
    return any(indicator in lowered for indicator in TEST_PATH_INDICATORS)


def is_selectable(path: str) -> bool:
    """Check if a path may appear in a final selection."""
    return not is_large_dependency_file(path) and not is_noise_path(path)
