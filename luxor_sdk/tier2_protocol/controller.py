"""
luxor_sdk.tier2_protocol.controller
────────────────────────────────────
Async client for the Luxor ZD wi-fi controller. One coroutine per method;
each executes the exchange and then checks the response's Status.

A failed call raises. Transport and decoding failures come from the
executor (no response). A non-zero Status raises ApplicationStatusError
with the decoded response attached as ``error.response``.

Usage::

    controller = Controller("http://luxor/")
    themes = await controller.theme_list_get()
    for theme in themes.theme_list:
        await controller.illuminate_theme(
            IlluminateThemeRequest(theme_index=theme.theme_index, on_off=1)
        )
"""
from __future__ import annotations

from typing import Type, TypeVar

import httpx

from luxor_sdk.tier0_core.config import get_config
from luxor_sdk.tier0_core.logging import get_logger
from luxor_sdk.tier0_core.status import error_for_status
from luxor_sdk.tier1_runtime.cancel import CancellationToken
from luxor_sdk.tier1_runtime.executor import RequestExecutor
from luxor_sdk.tier2_protocol.messages import (
    AssignLightRequest, AssignLightResponse,
    ControllerNameRequest, ControllerNameResponse,
    ExtinguishAllRequest, ExtinguishAllResponse,
    FlashLightsRequest, FlashLightsResponse,
    GroupListAddRequest, GroupListAddResponse,
    GroupListClearRequest, GroupListClearResponse,
    GroupListDeleteRequest, GroupListDeleteResponse,
    GroupListGetRequest, GroupListGetResponse,
    GroupListRenameRequest, GroupListRenameResponse,
    GroupListReorderRequest, GroupListReorderResponse,
    IlluminateAllRequest, IlluminateAllResponse,
    IlluminateGroupRequest, IlluminateGroupResponse,
    IlluminateThemeRequest, IlluminateThemeResponse,
    LuxorRequest, LuxorResponse,
    ThemeClearRequest, ThemeClearResponse,
    ThemeGetRequest, ThemeGetResponse,
    ThemeListAddRequest, ThemeListAddResponse,
    ThemeListClearRequest, ThemeListClearResponse,
    ThemeListDeleteRequest, ThemeListDeleteResponse,
    ThemeListGetRequest, ThemeListGetResponse,
    ThemeListRenameRequest, ThemeListRenameResponse,
    ThemeListReorderRequest, ThemeListReorderResponse,
    ThemeSetRequest, ThemeSetResponse,
)

R = TypeVar("R", bound=LuxorResponse)

log = get_logger(__name__)


class Controller:
    """
    Client bound to one controller. Holds only immutable configuration, so
    one instance may serve any number of concurrent calls.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._executor = RequestExecutor(base_url or get_config().base_url, client=client)

    @property
    def base_url(self) -> str:
        return self._executor.base_url

    async def call(
        self,
        method: str,
        request: LuxorRequest | dict,
        response_model: Type[R],
        token: CancellationToken | None = None,
    ) -> R:
        """Execute *method* and translate a non-zero Status into an error."""
        response = await self._executor.execute(method, request, response_model, token)
        error = error_for_status(response.status, method=method, response=response)
        if error is not None:
            log.warning(
                "luxor.status.error",
                method=method,
                status=error.status,
                description=error.description,
            )
            raise error
        return response

    # ── Lights and controller ─────────────────────────────────────────────

    async def assign_light(
        self, request: AssignLightRequest, token: CancellationToken | None = None
    ) -> AssignLightResponse:
        """Assign a light, by serial number, to a group number."""
        return await self.call("AssignLight", request, AssignLightResponse, token)

    async def controller_name(
        self, request: ControllerNameRequest | None = None, token: CancellationToken | None = None
    ) -> ControllerNameResponse:
        return await self.call(
            "ControllerName", request or ControllerNameRequest(), ControllerNameResponse, token
        )

    async def extinguish_all(
        self, request: ExtinguishAllRequest | None = None, token: CancellationToken | None = None
    ) -> ExtinguishAllResponse:
        """Set every group to 0%, turn every theme off, and leave flash mode."""
        return await self.call(
            "ExtinguishAll", request or ExtinguishAllRequest(), ExtinguishAllResponse, token
        )

    async def flash_lights(
        self, request: FlashLightsRequest, token: CancellationToken | None = None
    ) -> FlashLightsResponse:
        """
        Enter or leave the mode used while assigning lights. In this mode all
        lights are at 100% (not reflected by group_list_get); leaving it
        turns everything off.
        """
        return await self.call("FlashLights", request, FlashLightsResponse, token)

    async def illuminate_all(
        self, request: IlluminateAllRequest | None = None, token: CancellationToken | None = None
    ) -> IlluminateAllResponse:
        """Illuminate every light at 75%."""
        return await self.call(
            "IlluminateAll", request or IlluminateAllRequest(), IlluminateAllResponse, token
        )

    async def illuminate_group(
        self, request: IlluminateGroupRequest, token: CancellationToken | None = None
    ) -> IlluminateGroupResponse:
        """Set one group's intensity without touching the others."""
        return await self.call("IlluminateGroup", request, IlluminateGroupResponse, token)

    async def illuminate_theme(
        self, request: IlluminateThemeRequest, token: CancellationToken | None = None
    ) -> IlluminateThemeResponse:
        return await self.call("IlluminateTheme", request, IlluminateThemeResponse, token)

    # ── Groups ────────────────────────────────────────────────────────────

    async def group_list_add(
        self, request: GroupListAddRequest, token: CancellationToken | None = None
    ) -> GroupListAddResponse:
        return await self.call("GroupListAdd", request, GroupListAddResponse, token)

    async def group_list_clear(
        self, request: GroupListClearRequest | None = None, token: CancellationToken | None = None
    ) -> GroupListClearResponse:
        """Delete all groups."""
        return await self.call(
            "GroupListClear", request or GroupListClearRequest(), GroupListClearResponse, token
        )

    async def group_list_delete(
        self, request: GroupListDeleteRequest, token: CancellationToken | None = None
    ) -> GroupListDeleteResponse:
        return await self.call("GroupListDelete", request, GroupListDeleteResponse, token)

    async def group_list_get(
        self, request: GroupListGetRequest | None = None, token: CancellationToken | None = None
    ) -> GroupListGetResponse:
        """All groups with their current intensities."""
        return await self.call(
            "GroupListGet", request or GroupListGetRequest(), GroupListGetResponse, token
        )

    async def group_list_rename(
        self, request: GroupListRenameRequest, token: CancellationToken | None = None
    ) -> GroupListRenameResponse:
        return await self.call("GroupListRename", request, GroupListRenameResponse, token)

    async def group_list_reorder(
        self, request: GroupListReorderRequest, token: CancellationToken | None = None
    ) -> GroupListReorderResponse:
        return await self.call("GroupListReorder", request, GroupListReorderResponse, token)

    # ── Themes ────────────────────────────────────────────────────────────

    async def theme_clear(
        self, request: ThemeClearRequest, token: CancellationToken | None = None
    ) -> ThemeClearResponse:
        """Remove every group from a theme."""
        return await self.call("ThemeClear", request, ThemeClearResponse, token)

    async def theme_get(
        self, request: ThemeGetRequest, token: CancellationToken | None = None
    ) -> ThemeGetResponse:
        """A theme's (group, intensity) list."""
        return await self.call("ThemeGet", request, ThemeGetResponse, token)

    async def theme_list_add(
        self, request: ThemeListAddRequest, token: CancellationToken | None = None
    ) -> ThemeListAddResponse:
        return await self.call("ThemeListAdd", request, ThemeListAddResponse, token)

    async def theme_list_clear(
        self, request: ThemeListClearRequest | None = None, token: CancellationToken | None = None
    ) -> ThemeListClearResponse:
        return await self.call(
            "ThemeListClear", request or ThemeListClearRequest(), ThemeListClearResponse, token
        )

    async def theme_list_delete(
        self, request: ThemeListDeleteRequest, token: CancellationToken | None = None
    ) -> ThemeListDeleteResponse:
        return await self.call("ThemeListDelete", request, ThemeListDeleteResponse, token)

    async def theme_list_get(
        self, request: ThemeListGetRequest | None = None, token: CancellationToken | None = None
    ) -> ThemeListGetResponse:
        """Themes and their on/off state, without their group lists."""
        return await self.call(
            "ThemeListGet", request or ThemeListGetRequest(), ThemeListGetResponse, token
        )

    async def theme_list_rename(
        self, request: ThemeListRenameRequest, token: CancellationToken | None = None
    ) -> ThemeListRenameResponse:
        return await self.call("ThemeListRename", request, ThemeListRenameResponse, token)

    async def theme_list_reorder(
        self, request: ThemeListReorderRequest, token: CancellationToken | None = None
    ) -> ThemeListReorderResponse:
        return await self.call("ThemeListReorder", request, ThemeListReorderResponse, token)

    async def theme_set(
        self, request: ThemeSetRequest, token: CancellationToken | None = None
    ) -> ThemeSetResponse:
        """Redefine a theme's (group, intensity) list."""
        return await self.call("ThemeSet", request, ThemeSetResponse, token)


__all__ = ["Controller"]
