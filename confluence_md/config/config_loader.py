"""YAML configuration loading and validation.

This module loads and saves ConversionOptions from YAML files. The file
is split into a conversion section (rendering switches) and a links
section (parameters of the relative path link policy).
"""

import os
import posixpath
from typing import Any, Dict

import yaml

from confluence_md.config.errors import ConfigError, FilesystemError
from confluence_md.models.conversion_options import ConversionOptions, RelativePathPolicy


class ConfigLoader:
    """Handles configuration file loading, validation, and saving.

    Configuration file structure:
        conversion:
          compact_tables: false
          preserve_anchors: false
          emit_images: true
        links:
          images_dir: images
          attachments_dir: attachments
          page_suffix: .md

    Every section and field is optional; missing fields take the defaults
    below. Unknown sections or fields are rejected.
    """

    # Default values for each section
    DEFAULTS = {
        'conversion': {
            'compact_tables': False,
            'preserve_anchors': False,
            'emit_images': True,
        },
        'links': {
            'images_dir': 'images',
            'attachments_dir': 'attachments',
            'page_suffix': '.md',
        },
    }

    @classmethod
    def load(cls, config_path: str) -> ConversionOptions:
        """Load and parse configuration from a YAML file.

        Args:
            config_path: Path to the YAML configuration file

        Returns:
            ConversionOptions built from the file

        Raises:
            FilesystemError: If file cannot be read
            ConfigError: If configuration is invalid or malformed
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                content = f.read()
        except FileNotFoundError:
            raise FilesystemError(config_path, 'read', 'Configuration file not found')
        except PermissionError:
            raise FilesystemError(config_path, 'read', 'Permission denied')
        except OSError as e:
            raise FilesystemError(config_path, 'read', str(e))

        try:
            config_dict = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {str(e)}")

        # An empty file means all defaults
        if config_dict is None:
            config_dict = {}

        if not isinstance(config_dict, dict):
            raise ConfigError(
                f"Configuration must be a YAML dictionary, got {type(config_dict).__name__}"
            )

        return cls.from_dict(config_dict)

    @classmethod
    def save(cls, config_path: str, options: ConversionOptions) -> None:
        """Save options to a YAML file.

        Args:
            config_path: Path to the YAML configuration file
            options: Options to save

        Raises:
            ConfigError: If options use a custom link rewrite policy
            FilesystemError: If file cannot be written
        """
        policy = options.link_rewrite_policy
        if not isinstance(policy, RelativePathPolicy):
            raise ConfigError(
                "Only the relative path link policy can be saved",
                config_field='links',
            )

        config_dict = {
            'conversion': {
                'compact_tables': options.compact_tables,
                'preserve_anchors': options.preserve_anchors,
                'emit_images': options.emit_images,
            },
            'links': {
                'images_dir': policy.images_dir,
                'attachments_dir': policy.attachments_dir,
                'page_suffix': policy.page_suffix,
            },
        }

        yaml_str = yaml.safe_dump(
            config_dict,
            default_flow_style=False,
            allow_unicode=True,
            sort_keys=False
        )

        config_dir = os.path.dirname(config_path)
        if config_dir:
            try:
                os.makedirs(config_dir, exist_ok=True)
            except OSError as e:
                raise FilesystemError(config_dir, 'create_directory', str(e))

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                f.write(yaml_str)
        except PermissionError:
            raise FilesystemError(config_path, 'write', 'Permission denied')
        except OSError as e:
            raise FilesystemError(config_path, 'write', str(e))

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> ConversionOptions:
        """Validate a configuration dictionary and build options from it.

        Args:
            config_dict: Raw configuration dictionary from YAML

        Returns:
            Validated ConversionOptions

        Raises:
            ConfigError: If configuration is invalid
        """
        unknown_sections = set(config_dict) - set(cls.DEFAULTS)
        if unknown_sections:
            raise ConfigError(
                f"Unknown sections: {', '.join(sorted(map(str, unknown_sections)))}"
            )

        conversion = cls._parse_section(config_dict, 'conversion')
        links = cls._parse_section(config_dict, 'links')

        for field_name in ('compact_tables', 'preserve_anchors', 'emit_images'):
            if not isinstance(conversion[field_name], bool):
                raise ConfigError(
                    f"Must be true or false, got {conversion[field_name]!r}",
                    config_field=f"conversion.{field_name}",
                )

        for field_name in ('images_dir', 'attachments_dir'):
            cls._validate_directory(links[field_name], f"links.{field_name}")

        page_suffix = links['page_suffix']
        if not isinstance(page_suffix, str) or (page_suffix and not page_suffix.startswith('.')):
            raise ConfigError(
                f"Must be empty or start with '.', got {page_suffix!r}",
                config_field='links.page_suffix',
            )

        return ConversionOptions(
            compact_tables=conversion['compact_tables'],
            preserve_anchors=conversion['preserve_anchors'],
            emit_images=conversion['emit_images'],
            link_rewrite_policy=RelativePathPolicy(
                images_dir=links['images_dir'],
                attachments_dir=links['attachments_dir'],
                page_suffix=page_suffix,
            ),
        )

    @classmethod
    def _parse_section(cls, config_dict: Dict[str, Any], section: str) -> Dict[str, Any]:
        """Merge a section over its defaults, rejecting unknown fields."""
        raw = config_dict.get(section)
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(
                f"Must be a dictionary, got {type(raw).__name__}",
                config_field=section,
            )

        unknown_fields = set(raw) - set(cls.DEFAULTS[section])
        if unknown_fields:
            raise ConfigError(
                f"Unknown fields: {', '.join(sorted(map(str, unknown_fields)))}",
                config_field=section,
            )

        values = dict(cls.DEFAULTS[section])
        values.update(raw)
        return values

    @staticmethod
    def _validate_directory(value: Any, config_field: str) -> None:
        if not isinstance(value, str) or not value.strip():
            raise ConfigError("Must be a non-empty string", config_field=config_field)

        normalized = value.replace('\\', '/')
        if normalized.startswith('/') or os.path.isabs(value):
            raise ConfigError(f"Must be a relative path, got '{value}'", config_field=config_field)

        if posixpath.normpath(normalized).split('/')[0] == '..':
            raise ConfigError(
                f"Must stay inside the output directory, got '{value}'",
                config_field=config_field,
            )
