"""
Path management utilities for datastone.

This module provides a centralized way to create the directories that hold
database and log files.
"""

import os
from pathlib import Path
from typing import Set, Union

from loguru import logger


class PathManager:
    """
    A centralized manager for path operations in datastone.

    Directories are created at most once per process; later requests for the
    same directory are answered from memory.
    """

    _created_dirs: Set[str] = set()

    @classmethod
    def ensure_directory(cls, directory_path: Union[str, Path]) -> Path:
        """
        Ensure a directory exists, creating it if necessary.

        Args:
            directory_path: Path to the directory to ensure exists

        Returns:
            Path object for the created/existing directory
        """
        path = Path(directory_path)
        path_str = str(path.absolute())

        if path_str not in cls._created_dirs or not path.is_dir():
            logger.debug(f"Creating directory: {path_str}")
            os.makedirs(path_str, exist_ok=True)
            cls._created_dirs.add(path_str)

        return path

    @classmethod
    def get_parent_dir(cls, file_path: Union[str, Path]) -> Path:
        """
        Get the directory holding a file and ensure it exists.

        Args:
            file_path: Path to a file

        Returns:
            Path object for the parent directory
        """
        return cls.ensure_directory(Path(file_path).parent)
