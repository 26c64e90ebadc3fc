#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/descriptor.py - Read and update properties of a .csproj build descriptor
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

import codecs
import re
import xml.etree.ElementTree as ET
from xml.sax.saxutils import escape, unescape

from .errors import MetadataIOError
from .translation_utils import _

_COMMENT_PATTERN = re.compile(r'<!--.*?-->', re.DOTALL)
_GROUP_PATTERN = re.compile(r'<PropertyGroup(?P<attrs>\s[^>]*?)?(?<!/)>(?P<body>.*?)</PropertyGroup\s*>', re.DOTALL)
_PROJECT_END_PATTERN = re.compile(r'</Project\s*>')
_CONDITION_PATTERN = re.compile(r'\bCondition\s*=')


def _property_pattern(name):
    return re.compile(
        r'<(?P<name>{0})(?P<attrs>\s[^>]*?)?(?:/>|>(?P<value>[^<]*)</{0}\s*>)'.format(re.escape(name))
    )


class BuildDescriptor:
    """MSBuild project file whose top-level properties can be read and updated.

    Only the text of the touched property is rewritten; comments, ordering,
    indentation, line endings and a UTF-8 BOM are kept as they were.
    """

    def __init__(self, path, content, has_bom=False):
        self.path = str(path)
        self.content = content
        self.has_bom = has_bom

    @classmethod
    def open(cls, path):
        """Load and validate the descriptor at *path*"""
        try:
            with open(path, 'rb') as fh:
                raw = fh.read()
        except OSError as e:
            raise MetadataIOError(path, e.strerror or str(e)) from e

        has_bom = raw.startswith(codecs.BOM_UTF8)
        try:
            content = raw.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise MetadataIOError(path, _("not valid UTF-8 text")) from e

        descriptor = cls(path, content, has_bom)
        descriptor.validate()
        return descriptor

    def validate(self):
        """Raise MetadataIOError unless the content is a well-formed <Project> document"""
        try:
            root = ET.fromstring(self.content)
        except ET.ParseError as e:
            raise MetadataIOError(self.path, _("malformed XML ({0})").format(e)) from e

        # Legacy project files carry the msbuild namespace
        if root.tag.rsplit('}', 1)[-1] != "Project":
            raise MetadataIOError(self.path, _("root element is not <Project>"))

    @property
    def newline(self):
        return "\r\n" if "\r\n" in self.content else "\n"

    def _masked(self):
        """Content with comments blanked out so their text never matches"""
        return _COMMENT_PATTERN.sub(lambda m: " " * len(m.group(0)), self.content)

    def _groups(self):
        """Yield match objects of unconditioned <PropertyGroup> elements"""
        for group in _GROUP_PATTERN.finditer(self._masked()):
            if not _CONDITION_PATTERN.search(group.group('attrs') or ""):
                yield group

    def _find_property(self, name):
        pattern = _property_pattern(name)
        for group in self._groups():
            for match in pattern.finditer(group.group('body')):
                if _CONDITION_PATTERN.search(match.group('attrs') or ""):
                    continue
                return group, match
        return None, None

    @property
    def properties(self):
        """Mapping of property name to value; the first unconditioned occurrence wins"""
        any_property = re.compile(r'<(?P<name>[A-Za-z_][\w.-]*)(?P<attrs>\s[^>]*?)?(?:/>|>(?P<value>[^<]*)</(?P=name)\s*>)')
        result = {}
        for group in self._groups():
            for match in any_property.finditer(group.group('body')):
                if _CONDITION_PATTERN.search(match.group('attrs') or ""):
                    continue
                result.setdefault(match.group('name'), unescape(match.group('value') or "").strip())
        return result

    def get_property(self, name, default=None):
        return self.properties.get(name, default)

    def set_property(self, name, value):
        """Update property *name*, adding it to the first property group when missing"""
        element = f"<{name}>{escape(value)}</{name}>"
        group, match = self._find_property(name)

        if match:
            body_start = group.start('body')
            start, end = body_start + match.start(), body_start + match.end()
            self.content = self.content[:start] + element + self.content[end:]
            return

        group = next(self._groups(), None)
        if group:
            self._insert_into_group(group, element)
        else:
            self._append_group(element)

    def _insert_into_group(self, group, element):
        nl = self.newline
        body = group.group('body')
        close_pos = group.end('body')

        # Indentation of the closing tag, if it sits on its own line
        line_start = self.content.rfind("\n", 0, close_pos) + 1
        closing_indent = self.content[line_start:close_pos]

        if closing_indent.strip() or "\n" not in body:
            # <PropertyGroup></PropertyGroup> or closing tag after content
            self.content = self.content[:close_pos] + element + self.content[close_pos:]
            return

        child_indent = None
        for line in body.splitlines():
            if line.strip().startswith("<"):
                child_indent = line[:len(line) - len(line.lstrip())]
                break
        if child_indent is None:
            child_indent = closing_indent + "  "

        self.content = self.content[:line_start] + child_indent + element + nl + self.content[line_start:]

    def _append_group(self, element):
        nl = self.newline
        project_end = None
        for project_end in _PROJECT_END_PATTERN.finditer(self._masked()):
            pass
        if project_end is None:
            raise MetadataIOError(self.path, _("no closing </Project> tag"))

        pos = project_end.start()
        line_start = self.content.rfind("\n", 0, pos) + 1
        indent = "  "
        group = f"{indent}<PropertyGroup>{nl}{indent * 2}{element}{nl}{indent}</PropertyGroup>{nl}"

        if self.content[line_start:pos].strip():
            group = nl + group
            line_start = pos
        self.content = self.content[:line_start] + group + self.content[line_start:]

    def save(self):
        """Write the descriptor back to disk"""
        data = self.content.encode('utf-8')
        if self.has_bom:
            data = codecs.BOM_UTF8 + data
        try:
            with open(self.path, 'wb') as fh:
                fh.write(data)
        except OSError as e:
            raise MetadataIOError(self.path, e.strerror or str(e)) from e
