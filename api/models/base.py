# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Base models shared by API schemas and stored records.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for request and response bodies, exchanged in camelCase JSON."""

    model_config = ConfigDict(
        # Accept and emit camelCase keys, but allow snake_case in Python code
        alias_generator=to_camel,
        populate_by_name=True,
        # Use enum values instead of enum objects
        use_enum_values=True
    )

    def to_json_dict(self, exclude_none: bool = False) -> dict:
        """Serialize using camelCase aliases."""
        return self.model_dump(by_alias=True, exclude_none=exclude_none)


class DomainModel(BaseModel):
    """Base for domain entities built from stored records."""

    model_config = ConfigDict(
        validate_assignment=True,
        arbitrary_types_allowed=True
    )
