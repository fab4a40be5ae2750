"""
luxor_sdk.tier2_protocol.messages
──────────────────────────────────
Request and response shapes for every controller method.

Concepts the shapes refer to:

Group numbers: lights are assigned to uint8 group numbers, either by
plugging them into a port on the controller or with AssignLight given the
light's serial number. Any number of lights share a group number, and
IlluminateGroup sets them all to an intensity. Useful intensities are
[0, 100]; higher values are accepted but are no brighter.

Groups: each group number has at most one named group. Groups are shown in
a user-controlled order and persist across controller restarts.

Themes: a stored list of (group, intensity) pairs, addressed by an index in
[0, 26) (shown as 'A'..'Z' by the app) and named with up to 19 bytes. If a
theme lists a group twice the last pair wins. A theme is "on" or "off"
according to the last IlluminateTheme or ExtinguishAll.
"""
from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal

MAX_INTENSITY = 100
MAX_THEME_NUMBER = 25
MAX_NAME_LENGTH = 19

UInt8 = Annotated[int, Field(ge=0, le=255)]


class _Record(BaseModel):
    """PascalCase on the wire, snake_case in Python; unknown fields ignored."""
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, extra="ignore")


class LuxorRequest(BaseModel):
    """Base for requests. Unknown fields are rejected."""
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True, extra="forbid")


class LuxorResponse(_Record):
    """
    Base for responses. Every response carries Status (0 = success).
    A body without Status decodes as success.
    """
    status: int = 0


# ── Shared records ─────────────────────────────────────────────────────────

class Group(_Record):
    group_number: UInt8 = 0
    intensity: UInt8 = 0
    name: str = ""


class Theme(_Record):
    name: str = ""
    theme_index: UInt8 = 0
    on_off: UInt8 = 0


class ThemeGroup(_Record):
    group_number: UInt8 = 0
    intensity: UInt8 = 0


# ── Lights and controller ──────────────────────────────────────────────────

class AssignLightRequest(LuxorRequest):
    serial_number: int = 0
    group_number: UInt8 = 0


class AssignLightResponse(LuxorResponse):
    pass


class ControllerNameRequest(LuxorRequest):
    pass


class ControllerNameResponse(LuxorResponse):
    controller: str = ""


class ExtinguishAllRequest(LuxorRequest):
    pass


class ExtinguishAllResponse(LuxorResponse):
    pass


class FlashLightsRequest(LuxorRequest):
    on_off: UInt8 = 0


class FlashLightsResponse(LuxorResponse):
    pass


class IlluminateAllRequest(LuxorRequest):
    pass


class IlluminateAllResponse(LuxorResponse):
    pass


class IlluminateGroupRequest(LuxorRequest):
    group_number: UInt8 = 0
    intensity: UInt8 = 0


class IlluminateGroupResponse(LuxorResponse):
    pass


class IlluminateThemeRequest(LuxorRequest):
    theme_index: UInt8 = 0
    # 0 turns the theme's groups off; non-zero applies the stored intensities.
    on_off: UInt8 = 0


class IlluminateThemeResponse(LuxorResponse):
    pass


# ── Groups ─────────────────────────────────────────────────────────────────

class GroupListAddRequest(LuxorRequest):
    group_number: UInt8 = 0
    # Truncated by the controller to MAX_NAME_LENGTH.
    name: str = ""


class GroupListAddResponse(LuxorResponse):
    """Status is GROUP_NUMBER_IN_USE or GROUP_NAME_IN_USE on collision."""


class GroupListClearRequest(LuxorRequest):
    pass


class GroupListClearResponse(LuxorResponse):
    group_list: list[Group] = Field(default_factory=list)


class GroupListDeleteRequest(LuxorRequest):
    name: str = ""


class GroupListDeleteResponse(LuxorResponse):
    """Status is PRECONDITION_FAILED if the group does not exist."""


class GroupListGetRequest(LuxorRequest):
    pass


class GroupListGetResponse(LuxorResponse):
    group_list: list[Group] = Field(default_factory=list)


class GroupListRenameRequest(LuxorRequest):
    old_name: str = ""
    # Truncated by the controller to MAX_NAME_LENGTH.
    new_name: str = ""


class GroupListRenameResponse(LuxorResponse):
    """Status is GROUP_NAME_IN_USE if the new name is taken."""


class GroupListReorderRequest(LuxorRequest):
    # Must list every existing group number exactly once.
    group_numbers: list[UInt8] = Field(default_factory=list)


class GroupListReorderResponse(LuxorResponse):
    """Status is PRECONDITION_FAILED unless every group was listed exactly once."""


# ── Themes ─────────────────────────────────────────────────────────────────

class ThemeClearRequest(LuxorRequest):
    theme_index: UInt8 = 0


class ThemeClearResponse(LuxorResponse):
    pass


class ThemeGetRequest(LuxorRequest):
    theme_index: UInt8 = 0


class ThemeGetResponse(LuxorResponse):
    groups: list[ThemeGroup] = Field(default_factory=list)


class ThemeListAddRequest(LuxorRequest):
    theme_index: UInt8 = 0
    # Truncated by the controller to MAX_NAME_LENGTH.
    name: str = ""


class ThemeListAddResponse(LuxorResponse):
    pass


class ThemeListClearRequest(LuxorRequest):
    pass


class ThemeListClearResponse(LuxorResponse):
    pass


class ThemeListDeleteRequest(LuxorRequest):
    name: str = ""


class ThemeListDeleteResponse(LuxorResponse):
    """
    Status is INVALID_REQUEST if themes are restricted, or
    PRECONDITION_FAILED if the theme does not exist.
    """


class ThemeListGetRequest(LuxorRequest):
    pass


class ThemeListGetResponse(LuxorResponse):
    # Non-zero iff themes are restricted in the controller's setup menu;
    # some theme operations are then refused.
    restricted: int = 0
    theme_list: list[Theme] = Field(default_factory=list)


class ThemeListRenameRequest(LuxorRequest):
    old_name: str = ""
    # Truncated by the controller to MAX_NAME_LENGTH.
    new_name: str = ""


class ThemeListRenameResponse(LuxorResponse):
    pass


class ThemeListReorderRequest(LuxorRequest):
    theme_indexes: list[UInt8] = Field(default_factory=list)


class ThemeListReorderResponse(LuxorResponse):
    """Status is PRECONDITION_FAILED unless every theme was listed exactly once."""


class ThemeSetRequest(LuxorRequest):
    theme_index: UInt8 = 0
    groups: list[ThemeGroup] = Field(default_factory=list)


class ThemeSetResponse(LuxorResponse):
    pass


__all__ = [
    "MAX_INTENSITY", "MAX_THEME_NUMBER", "MAX_NAME_LENGTH", "UInt8",
    "LuxorRequest", "LuxorResponse", "Group", "Theme", "ThemeGroup",
    "AssignLightRequest", "AssignLightResponse",
    "ControllerNameRequest", "ControllerNameResponse",
    "ExtinguishAllRequest", "ExtinguishAllResponse",
    "FlashLightsRequest", "FlashLightsResponse",
    "GroupListAddRequest", "GroupListAddResponse",
    "GroupListClearRequest", "GroupListClearResponse",
    "GroupListDeleteRequest", "GroupListDeleteResponse",
    "GroupListGetRequest", "GroupListGetResponse",
    "GroupListRenameRequest", "GroupListRenameResponse",
    "GroupListReorderRequest", "GroupListReorderResponse",
    "IlluminateAllRequest", "IlluminateAllResponse",
    "IlluminateGroupRequest", "IlluminateGroupResponse",
    "IlluminateThemeRequest", "IlluminateThemeResponse",
    "ThemeClearRequest", "ThemeClearResponse",
    "ThemeGetRequest", "ThemeGetResponse",
    "ThemeListAddRequest", "ThemeListAddResponse",
    "ThemeListClearRequest", "ThemeListClearResponse",
    "ThemeListDeleteRequest", "ThemeListDeleteResponse",
    "ThemeListGetRequest", "ThemeListGetResponse",
    "ThemeListRenameRequest", "ThemeListRenameResponse",
    "ThemeListReorderRequest", "ThemeListReorderResponse",
    "ThemeSetRequest", "ThemeSetResponse",
]
