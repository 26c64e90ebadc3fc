#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/project.py - Project descriptor and artifact naming
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

import os
from dataclasses import dataclass

from .config import ARTIFACT_EXTENSION, DESCRIPTOR_EXTENSION
from .errors import MetadataIOError
from .translation_utils import _


@dataclass(frozen=True)
class ProjectDescriptor:
    """A .NET project selected for publishing"""

    name: str
    descriptor_path: str
    base_directory: str

    @classmethod
    def from_path(cls, path) -> "ProjectDescriptor":
        """Build a descriptor from a .csproj file or a directory holding exactly one.

        Raises MetadataIOError when no single project file can be identified.
        """
        path = os.path.abspath(os.path.expanduser(str(path)))

        if os.path.isdir(path):
            candidates = sorted(
                f for f in os.listdir(path)
                if f.endswith(DESCRIPTOR_EXTENSION) and os.path.isfile(os.path.join(path, f))
            )
            if not candidates:
                raise MetadataIOError(path, _("no {0} file found in directory").format(DESCRIPTOR_EXTENSION))
            if len(candidates) > 1:
                raise MetadataIOError(
                    path, _("several project files found ({0}); select one").format(", ".join(candidates))
                )
            path = os.path.join(path, candidates[0])
        elif not os.path.isfile(path):
            raise MetadataIOError(path, _("file does not exist"))
        elif not path.endswith(DESCRIPTOR_EXTENSION):
            raise MetadataIOError(path, _("not a {0} project file").format(DESCRIPTOR_EXTENSION))

        name = os.path.splitext(os.path.basename(path))[0]
        return cls(name=name, descriptor_path=path, base_directory=os.path.dirname(path))


def artifact_file_name(project_name: str, version: str) -> str:
    """Return the package file name produced by `pack`"""
    return f"{project_name}.{version}{ARTIFACT_EXTENSION}"


def artifact_path(project: ProjectDescriptor, version: str, configuration: str) -> str:
    """Return where `pack` writes the package for *version* in *configuration*"""
    return os.path.join(project.base_directory, "bin", configuration, artifact_file_name(project.name, version))
