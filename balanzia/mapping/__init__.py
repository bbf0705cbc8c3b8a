"""Mapping layer package for raw-to-canonical transformation boundaries."""

from .identity import mapping_attach_identity_hash, mapping_compute_identity_hash
from .interfaces import (
	CANONICAL_FIELD_NAMES,
	DELIMITED_TEXT_FILE_KIND,
	REQUIRED_CANONICAL_FIELDS,
	SUPPORTED_FILE_KINDS,
	MappedRow,
	MappingPort,
	MappingTemplate,
	RawUploadRow,
)
from .normalizer import NormalizerConfig, TransactionNormalizer
from .service import ColumnMappingService
from .templates import DEFAULT_TEMPLATE_NAME, mapping_build_template, mapping_default_template

__all__ = [
	"CANONICAL_FIELD_NAMES",
	"DELIMITED_TEXT_FILE_KIND",
	"REQUIRED_CANONICAL_FIELDS",
	"SUPPORTED_FILE_KINDS",
	"MappedRow",
	"MappingPort",
	"MappingTemplate",
	"RawUploadRow",
	"NormalizerConfig",
	"TransactionNormalizer",
	"ColumnMappingService",
	"DEFAULT_TEMPLATE_NAME",
	"mapping_build_template",
	"mapping_default_template",
	"mapping_attach_identity_hash",
	"mapping_compute_identity_hash",
]
