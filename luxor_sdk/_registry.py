"""
luxor_sdk._registry
─────────────────────
Method registry: the single source of truth for which controller methods
exist, their request/response shapes, and a one-line description.

Front-ends that pick a method by name at runtime (the CLI) go through
``get_method()``; each MethodSpec knows how to decode request text, invoke
the method on a Controller, and encode the response. Nothing here
introspects the Controller class.

Adding a method:
  1. Add its request/response models to tier2_protocol.messages
  2. Add a coroutine to Controller
  3. Add one MethodSpec to METHODS below
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Type

from pydantic import ValidationError as PydanticValidationError

from luxor_sdk.tier0_core.errors import InvalidRequestError, UnknownMethodError
from luxor_sdk.tier1_runtime.cancel import CancellationToken
from luxor_sdk.tier1_runtime.serialize import to_pretty_json
from luxor_sdk.tier2_protocol import messages as m
from luxor_sdk.tier2_protocol.controller import Controller


@dataclass(frozen=True)
class MethodSpec:
    name: str
    request_model: Type[m.LuxorRequest]
    response_model: Type[m.LuxorResponse]
    description: str

    def decode(self, text: str | None) -> m.LuxorRequest:
        """Parse JSON request text (wire names). Empty text gives the default request."""
        if not text or not text.strip():
            return self.request_model()
        try:
            return self.request_model.model_validate_json(text)
        except PydanticValidationError as exc:
            raise InvalidRequestError(
                f"{self.name}: invalid request {text!r}: {exc}", method=self.name
            ) from exc

    async def invoke(
        self,
        controller: Controller,
        request: m.LuxorRequest,
        token: CancellationToken | None = None,
    ) -> m.LuxorResponse:
        return await controller.call(self.name, request, self.response_model, token)

    def encode(self, response: m.LuxorResponse) -> str:
        return to_pretty_json(response)


# ---------------------------------------------------------------------------
# Catalogue order follows the controller's documentation (alphabetical).
# ---------------------------------------------------------------------------
METHODS: tuple[MethodSpec, ...] = (
    MethodSpec("AssignLight", m.AssignLightRequest, m.AssignLightResponse,
               "Assign a light, by serial number, to a group number"),
    MethodSpec("ControllerName", m.ControllerNameRequest, m.ControllerNameResponse,
               "Return the controller's name"),
    MethodSpec("ExtinguishAll", m.ExtinguishAllRequest, m.ExtinguishAllResponse,
               "Turn every group off and every theme off"),
    MethodSpec("FlashLights", m.FlashLightsRequest, m.FlashLightsResponse,
               "Enter or leave light-assignment mode"),
    MethodSpec("GroupListAdd", m.GroupListAddRequest, m.GroupListAddResponse,
               "Append a named group"),
    MethodSpec("GroupListClear", m.GroupListClearRequest, m.GroupListClearResponse,
               "Delete all groups"),
    MethodSpec("GroupListDelete", m.GroupListDeleteRequest, m.GroupListDeleteResponse,
               "Delete a group by name"),
    MethodSpec("GroupListGet", m.GroupListGetRequest, m.GroupListGetResponse,
               "List groups with current intensities"),
    MethodSpec("GroupListRename", m.GroupListRenameRequest, m.GroupListRenameResponse,
               "Rename a group"),
    MethodSpec("GroupListReorder", m.GroupListReorderRequest, m.GroupListReorderResponse,
               "Reorder groups"),
    MethodSpec("IlluminateAll", m.IlluminateAllRequest, m.IlluminateAllResponse,
               "Illuminate every light at 75%"),
    MethodSpec("IlluminateGroup", m.IlluminateGroupRequest, m.IlluminateGroupResponse,
               "Set one group's intensity"),
    MethodSpec("IlluminateTheme", m.IlluminateThemeRequest, m.IlluminateThemeResponse,
               "Turn a theme on or off"),
    MethodSpec("ThemeClear", m.ThemeClearRequest, m.ThemeClearResponse,
               "Remove every group from a theme"),
    MethodSpec("ThemeGet", m.ThemeGetRequest, m.ThemeGetResponse,
               "Get a theme's group intensities"),
    MethodSpec("ThemeListAdd", m.ThemeListAddRequest, m.ThemeListAddResponse,
               "Add a theme"),
    MethodSpec("ThemeListClear", m.ThemeListClearRequest, m.ThemeListClearResponse,
               "Delete all themes"),
    MethodSpec("ThemeListDelete", m.ThemeListDeleteRequest, m.ThemeListDeleteResponse,
               "Delete a theme by name"),
    MethodSpec("ThemeListGet", m.ThemeListGetRequest, m.ThemeListGetResponse,
               "List themes and their on/off state"),
    MethodSpec("ThemeListRename", m.ThemeListRenameRequest, m.ThemeListRenameResponse,
               "Rename a theme"),
    MethodSpec("ThemeListReorder", m.ThemeListReorderRequest, m.ThemeListReorderResponse,
               "Reorder themes"),
    MethodSpec("ThemeSet", m.ThemeSetRequest, m.ThemeSetResponse,
               "Redefine a theme's group intensities"),
)

_BY_NAME: dict[str, MethodSpec] = {spec.name: spec for spec in METHODS}


def get_method(name: str) -> MethodSpec:
    """Return the spec for *name*. Raises UnknownMethodError."""
    try:
        return _BY_NAME[name]
    except KeyError:
        raise UnknownMethodError(name) from None


def method_names() -> list[str]:
    return [spec.name for spec in METHODS]
