"""Application state controller.

Owns the session (current user, open project, search query, drag
state) and the AppState snapshot. Every mutation goes through the
project store, saves the resulting full state through the repository
and only then replaces the snapshot.

Readers always see a complete immutable snapshot: the state is only
ever replaced, never modified in place.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from proyectate.application import project_service, task_service
from proyectate.application.project_service import find_project
from proyectate.domain.project import AppState, Project, default_app_state
from proyectate.domain.shared import DomainError, Err, Ok, Result
from proyectate.domain.task import (
    ActivityType,
    AttachmentType,
    DropPosition,
    Task,
    find_task,
    search,
)
from proyectate.domain.user import User, default_users, find_user
from proyectate.infrastructure.ai import Advisor
from proyectate.infrastructure.media import BlobEncoder
from proyectate.infrastructure.storage import StateRepository, UserRepository

logger = logging.getLogger(__name__)

NO_ACTIVE_PROJECT = "Sin proyecto activo seleccionado en el dashboard."

ControllerResult = Result[AppState, DomainError]


class AppController:
    """Single point through which the presentation layer changes state.

    Attributes:
        state: Current immutable snapshot of every project.
        users: The user roster.
        current_user: Selected user, None until one is selected.
        active_project_id: Project that task operations apply to.
        search_query: Filter for visible_tasks().
        dragged_task_id: Task currently being dragged, if any.
    """

    def __init__(
        self,
        repository: StateRepository,
        user_repository: UserRepository | None = None,
        state: AppState | None = None,
        users: list[User] | None = None,
    ) -> None:
        self._repository = repository
        self._user_repository = user_repository
        self.state = state if state is not None else default_app_state()
        self.users = users if users is not None else default_users()
        self.current_user: User | None = None
        self.active_project_id: str | None = None
        self.search_query = ""
        self.dragged_task_id: str | None = None

    @classmethod
    def load(
        cls,
        repository: StateRepository,
        user_repository: UserRepository | None = None,
    ) -> "AppController":
        """Create a controller from persisted state.

        Falls back to the built-in default state when nothing is stored
        or the stored document cannot be parsed, and to the default
        roster when the users file is unreadable.
        """
        result = repository.load()
        if isinstance(result, Err):
            if repository.exists():
                logger.warning(f"Could not load state, using defaults: {result.error}")
            state = default_app_state()
        else:
            state = result.value

        users = default_users()
        if user_repository is not None:
            users_result = user_repository.load()
            if isinstance(users_result, Err):
                logger.warning(f"Could not load users, using defaults: {users_result.error}")
            else:
                users = users_result.value

        return cls(repository, user_repository, state=state, users=users)

    # =========================================================================
    # Session
    # =========================================================================

    def select_user(self, user_id: str) -> Result[User, DomainError]:
        user = find_user(self.users, user_id)
        if user is None:
            return Err(DomainError.not_found(f"Unknown user: {user_id}"))
        self.current_user = user
        return Ok(user)

    def logout(self) -> None:
        self.current_user = None
        self.active_project_id = None
        self.search_query = ""
        self.dragged_task_id = None

    def open_project(self, project_id: str) -> Result[Project, DomainError]:
        project = find_project(self.state.projects, project_id)
        if project is None:
            return Err(DomainError.not_found(f"Project not found: {project_id}"))
        self.active_project_id = project_id
        return Ok(project)

    def close_project(self) -> None:
        self.active_project_id = None
        self.search_query = ""

    @property
    def active_project(self) -> Project | None:
        return find_project(self.state.projects, self.active_project_id)

    def set_search(self, query: str) -> None:
        self.search_query = query

    def visible_tasks(self) -> list[Task]:
        """Root tasks to display: filtered by the search query when one is set."""
        project = self.active_project
        if project is None:
            return []
        if not self.search_query.strip():
            return project.tasks
        return search(project.tasks, self.search_query.strip())

    def resolve_task(self, task_id: str) -> Task | None:
        """Live version of a task in the active project."""
        project = self.active_project
        if project is None:
            return None
        return find_task(project.tasks, task_id)

    def context_summary(self) -> str:
        """One-line description of the active project for the advisor."""
        project = self.active_project
        if project is None:
            return NO_ACTIVE_PROJECT
        titles = ", ".join(task.title for task in project.tasks)
        return f"Proyecto Activo: {project.title} ({project.subtitle}). Tareas actuales: {titles}."

    # =========================================================================
    # Commit
    # =========================================================================

    def _require_user(self) -> Result[User, DomainError]:
        if self.current_user is None:
            return Err(DomainError.invalid_input("Select a user first"))
        return Ok(self.current_user)

    def _commit(
        self,
        mutate: Callable[[list[Project], User], Result[list[Project], DomainError]],
    ) -> ControllerResult:
        """Run a store operation for the current user and persist its result."""
        user_result = self._require_user()
        if isinstance(user_result, Err):
            return user_result

        result = mutate(self.state.projects, user_result.value)
        if isinstance(result, Err):
            logger.warning(f"Rejected: {result.error.message}")
            return result

        new_state = self.state
        if result.value is not self.state.projects:
            new_state = self.state.model_copy(update={"projects": result.value})

        saved = self._repository.save(new_state)
        if isinstance(saved, Err):
            logger.error(f"Failed to save state: {saved.error}")
            return Err(DomainError.external(f"Changes could not be saved: {saved.error}"))

        self.state = new_state
        return Ok(self.state)

    # =========================================================================
    # Project operations
    # =========================================================================

    def create_project(self, title: str, subtitle: str = "") -> ControllerResult:
        return self._commit(
            lambda projects, user: project_service.create_project(projects, title, subtitle, user.id)
        )

    def update_project(self, project_id: str, **fields) -> ControllerResult:
        return self._commit(
            lambda projects, user: project_service.update_project(projects, project_id, **fields)
        )

    def delete_project(self, project_id: str) -> ControllerResult:
        result = self._commit(
            lambda projects, user: project_service.delete_project(projects, project_id, user.id)
        )
        if isinstance(result, Ok) and self.active_project_id == project_id:
            self.close_project()
        return result

    # =========================================================================
    # Task operations
    # =========================================================================

    def add_task(
        self,
        title: str,
        parent_id: str | None = None,
        description: str | None = None,
    ) -> ControllerResult:
        return self._commit(
            lambda projects, user: task_service.add_task(
                projects, self.active_project_id, parent_id, title, user.id, description
            )
        )

    def toggle_status(self, task_id: str) -> ControllerResult:
        return self._commit(
            lambda projects, user: task_service.toggle_status(
                projects, self.active_project_id, task_id, user.id
            )
        )

    def delete_task(self, task_id: str) -> ControllerResult:
        return self._commit(
            lambda projects, user: task_service.delete_task(
                projects, self.active_project_id, task_id, user.id
            )
        )

    def update_task(self, task_id: str, **fields) -> ControllerResult:
        return self._commit(
            lambda projects, user: task_service.update_task(
                projects, self.active_project_id, task_id, **fields
            )
        )

    def add_attachment(
        self,
        task_id: str,
        attachment_type: AttachmentType,
        name: str,
        url: str,
    ) -> ControllerResult:
        return self._commit(
            lambda projects, user: task_service.add_attachment(
                projects, self.active_project_id, task_id, attachment_type, name, url, user.id
            )
        )

    def add_activity(
        self,
        task_id: str,
        content: str,
        activity_type: ActivityType = ActivityType.COMMENT,
    ) -> ControllerResult:
        return self._commit(
            lambda projects, user: task_service.add_activity(
                projects, self.active_project_id, task_id, content, activity_type, user.id
            )
        )

    def toggle_expand(self, task_id: str) -> ControllerResult:
        return self._commit(
            lambda projects, user: task_service.toggle_expand(
                projects, self.active_project_id, task_id
            )
        )

    def move_task(
        self,
        dragged_id: str,
        target_id: str,
        position: DropPosition,
    ) -> ControllerResult:
        return self._commit(
            lambda projects, user: task_service.move_task(
                projects, self.active_project_id, dragged_id, target_id, position
            )
        )

    # =========================================================================
    # Drag and drop
    # =========================================================================

    def start_drag(self, task_id: str) -> None:
        self.dragged_task_id = task_id

    def end_drag(self) -> None:
        self.dragged_task_id = None

    def drop(self, target_id: str, position: DropPosition) -> ControllerResult:
        """Drop the dragged task on a target and clear the drag state."""
        dragged_id = self.dragged_task_id
        self.end_drag()
        if dragged_id is None:
            return Err(DomainError.invalid_input("No task is being dragged"))
        return self.move_task(dragged_id, target_id, position)

    # =========================================================================
    # Users
    # =========================================================================

    def update_current_user(
        self,
        name: str | None = None,
        avatar_url: str | None = None,
    ) -> Result[User, DomainError]:
        """Edit the selected user's display name or avatar and save the roster."""
        user_result = self._require_user()
        if isinstance(user_result, Err):
            return user_result

        updates: dict[str, str] = {}
        if name is not None:
            if not name.strip():
                return Err(DomainError.invalid_input("Name cannot be empty"))
            updates["name"] = name.strip()
        if avatar_url is not None:
            updates["avatar_url"] = avatar_url

        updated = user_result.value.model_copy(update=updates)
        users = [updated if u.id == updated.id else u for u in self.users]

        if self._user_repository is not None:
            saved = self._user_repository.save(users)
            if isinstance(saved, Err):
                logger.error(f"Failed to save users: {saved.error}")
                return Err(DomainError.external(f"Profile could not be saved: {saved.error}"))

        self.users = users
        self.current_user = updated
        return Ok(updated)

    # =========================================================================
    # External collaborators
    # =========================================================================

    def attach_file(
        self,
        task_id: str,
        path: Path,
        encoder: BlobEncoder,
        attachment_type: AttachmentType | None = None,
    ) -> ControllerResult:
        """Encode a file and attach it; encoding errors leave state untouched."""
        encoded = encoder.encode_file(path)
        if isinstance(encoded, Err):
            logger.warning(f"Could not encode {path}: {encoded.error}")
            return Err(DomainError.external(encoded.error))

        blob = encoded.value
        return self.add_attachment(
            task_id,
            attachment_type or blob.attachment_type,
            blob.name,
            blob.data_uri,
        )

    def _encode_image(self, path: Path, encoder: BlobEncoder) -> Result[str, DomainError]:
        encoded = encoder.encode_file(path)
        if isinstance(encoded, Err):
            logger.warning(f"Could not encode {path}: {encoded.error}")
            return Err(DomainError.external(encoded.error))
        if encoded.value.attachment_type != AttachmentType.IMAGE:
            return Err(DomainError.invalid_input(f"Not an image: {path.name}"))
        return Ok(encoded.value.data_uri)

    def update_avatar(self, path: Path, encoder: BlobEncoder) -> Result[User, DomainError]:
        """Use an image file as the selected user's avatar."""
        user_result = self._require_user()
        if isinstance(user_result, Err):
            return user_result
        image = self._encode_image(path, encoder)
        if isinstance(image, Err):
            return image
        return self.update_current_user(avatar_url=image.value)

    def set_project_image(
        self,
        project_id: str,
        path: Path,
        encoder: BlobEncoder,
    ) -> ControllerResult:
        """Use an image file as a project's cover."""
        image = self._encode_image(path, encoder)
        if isinstance(image, Err):
            return image
        return self.update_project(project_id, image_url=image.value)

    async def ask_advisor(self, question: str, advisor: Advisor) -> Result[str, DomainError]:
        """Ask the advisor about the active project."""
        if not question.strip():
            return Err(DomainError.invalid_input("Question cannot be empty"))
        answer = await advisor.ask(self.context_summary(), question.strip())
        return Ok(answer)

    async def suggest_next_steps(self, task_id: str, advisor: Advisor) -> ControllerResult:
        """Request suggestions for a task and store them on it.

        The request runs outside the core; when the answer arrives the
        task is looked up again and a stale answer (task deleted in the
        meantime) is dropped.
        """
        task = self.resolve_task(task_id)
        project = self.active_project
        if task is None or project is None:
            return Err(DomainError.not_found(f"Task not found: {task_id}"))

        suggestions = await advisor.suggest_next_steps(
            task.title,
            task.description or "",
            task.ai_context or "",
            project.title,
        )

        if self.resolve_task(task_id) is None:
            logger.info(f"Dropping suggestions for deleted task {task_id}")
            return Err(DomainError.not_found(f"Task not found: {task_id}"))
        return self.update_task(task_id, suggested_steps=suggestions)
