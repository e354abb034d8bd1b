"""
Admin dashboard sections over the /api/admin endpoints.

Every section works the same way. It fetches everything on load and saves through a
create/update call. Deletes need the caller's confirmation, and every mutation is followed
by a refetch. Nothing is applied optimistically, so a failed call leaves `items` as it was
and only adds a destructive toast.
"""
from typing import Any, Callable, NamedTuple

import httpx

from portfolio.app.core.logging_config import get_logger

logger = get_logger("client.admin")


class Toast(NamedTuple):
    title: str
    description: str
    variant: str = "default"  # "default" | "destructive"


class _Section:
    def __init__(self, http_client: httpx.Client, base_path: str = "/api/admin"):
        self.http_client = http_client
        self.base_path = base_path.rstrip("/")
        self.toasts: list[Toast] = []

    def _ok(self, description: str) -> None:
        self.toasts.append(Toast("Success", description))

    def _fail(self, description: str, error: Exception) -> None:
        logger.error("%s error=%s", description, error)
        self.toasts.append(Toast("Error", description, "destructive"))

    def _call(self, method: str, path: str, **kwargs) -> Any:
        resp = self.http_client.request(method, f"{self.base_path}{path}", **kwargs)
        resp.raise_for_status()
        return resp.json()


class AdminSection(_Section):
    """Fetch-all / save / confirm-delete flow for one collection (skills, projects, experiences)."""

    def __init__(self, http_client: httpx.Client, resource: str, label: str, base_path: str = "/api/admin"):
        super().__init__(http_client, base_path)
        self.resource = resource
        self.label = label
        self.items: list[dict] = []

    def refresh(self) -> list[dict]:
        try:
            self.items = self._call("GET", f"/{self.resource}")
        except (httpx.HTTPError, ValueError) as e:
            self._fail(f"Failed to fetch {self.resource}. Please try again.", e)
        return self.items

    def save(self, data: dict, item_id: str | None = None) -> bool:
        """Create when item_id is None, otherwise update."""
        try:
            if item_id is None:
                self._call("POST", f"/{self.resource}", json=data)
                self._ok(f"{self.label} added successfully!")
            else:
                self._call("PUT", f"/{self.resource}/{item_id}", json=data)
                self._ok(f"{self.label} updated successfully!")
        except (httpx.HTTPError, ValueError) as e:
            self._fail(f"Failed to save {self.label.lower()}. Please try again.", e)
            return False
        self.refresh()
        return True

    def delete(self, item_id: str, confirm: Callable[[str], bool]) -> bool:
        if not confirm(f"Are you sure you want to delete this {self.label.lower()}?"):
            return False
        try:
            self._call("DELETE", f"/{self.resource}/{item_id}")
            self._ok(f"{self.label} deleted successfully!")
        except (httpx.HTTPError, ValueError) as e:
            self._fail(f"Failed to delete {self.label.lower()}. Please try again.", e)
            return False
        self.refresh()
        return True


class SkillsAdmin(AdminSection):
    def __init__(self, http_client: httpx.Client, base_path: str = "/api/admin"):
        super().__init__(http_client, "skills", "Skill", base_path)


class ExperiencesAdmin(AdminSection):
    def __init__(self, http_client: httpx.Client, base_path: str = "/api/admin"):
        super().__init__(http_client, "experiences", "Experience", base_path)


class ProjectsAdmin(AdminSection):
    def __init__(self, http_client: httpx.Client, base_path: str = "/api/admin"):
        super().__init__(http_client, "projects", "Project", base_path)

    @property
    def featured_project_id(self) -> str | None:
        return next((p["id"] for p in self.items if p.get("isFeatured")), None)

    def set_featured(self, project_id: str) -> bool:
        try:
            self._call("POST", f"/projects/{project_id}/featured")
            self._ok("Featured project updated successfully!")
        except (httpx.HTTPError, ValueError) as e:
            self._fail("Failed to update featured project. Please try again.", e)
            return False
        self.refresh()
        return True


class ProfileAdmin(_Section):
    """The profile singleton: fetch, update, pick a photo. Never deleted."""

    def __init__(self, http_client: httpx.Client, base_path: str = "/api/admin"):
        super().__init__(http_client, base_path)
        self.profile: dict | None = None

    def refresh(self) -> dict | None:
        try:
            self.profile = self._call("GET", "/profile")
        except (httpx.HTTPError, ValueError) as e:
            self._fail("Failed to fetch profile. Please try again.", e)
        return self.profile

    def save(self, data: dict) -> bool:
        try:
            self.profile = self._call("PUT", "/profile", json=data)
            self._ok("Profile updated successfully!")
            return True
        except (httpx.HTTPError, ValueError) as e:
            self._fail("Failed to update profile. Please try again.", e)
            return False

    def select_photo(self, url: str) -> bool:
        try:
            self.profile = self._call("PATCH", "/profile/photo", json={"photoUrl": url})
            self._ok("Profile photo updated successfully!")
            return True
        except (httpx.HTTPError, ValueError) as e:
            self._fail("Failed to update profile photo. Please try again.", e)
            return False
