"""Window container hierarchy.

The hierarchy is a tree of containers ordered bottom to top: index 0 of a
container's children is the bottom-most child in z-order. Every container
carries a prefix order index, its position in a pre-order walk of the whole
tree, which is recomputed whenever the tree changes shape.
"""

import time
from collections.abc import Callable, Iterator

from src.tasks.models import ActivityType, Intent
from src.tasks.users import user_id_for_uid


Clock = Callable[[], int]
"""Returns the current time in milliseconds since boot."""

TaskCallback = Callable[["Task"], None]


def uptime_millis() -> int:
    """Monotonic milliseconds, the default clock for task activity times."""
    return time.monotonic_ns() // 1_000_000


class WindowContainer:
    """Base node of the window container tree."""

    def __init__(self) -> None:
        self._parent: WindowContainer | None = None
        self._children: list[WindowContainer] = []
        self.prefix_order_index = 0

    @property
    def parent(self) -> "WindowContainer | None":
        """Get the parent container, or None when detached."""
        return self._parent

    @property
    def children(self) -> tuple["WindowContainer", ...]:
        """Get the children ordered bottom to top."""
        return tuple(self._children)

    @property
    def root(self) -> "WindowContainer":
        """Get the top-most ancestor (self when detached)."""
        node = self
        while node._parent is not None:
            node = node._parent
        return node

    @property
    def display_content(self) -> "DisplayContent | None":
        """Get the display this container lives on, if any."""
        node: WindowContainer | None = self
        while node is not None:
            if isinstance(node, DisplayContent):
                return node
            node = node._parent
        return None

    def add_child(
        self, child: "WindowContainer", position: int | None = None
    ) -> None:
        """Attach a child container.

        Args:
            child: Container to attach. Must not already have a parent.
            position: Index to insert at (default: top).

        Raises:
            ValueError: If the child is already attached or is an ancestor.
        """
        if child._parent is not None:
            msg = f"{child!r} already has a parent"
            raise ValueError(msg)
        if child is self or self.is_descendant_of(child):
            msg = f"{child!r} cannot be attached below itself"
            raise ValueError(msg)

        if position is None:
            self._children.append(child)
        else:
            self._children.insert(position, child)
        child._parent = self
        self.root.assign_prefix_order()

    def remove_child(self, child: "WindowContainer") -> None:
        """Detach a child container.

        Args:
            child: Container to detach.

        Raises:
            ValueError: If ``child`` is not a child of this container.
        """
        if child._parent is not self:
            msg = f"{child!r} is not a child of {self!r}"
            raise ValueError(msg)
        self._children.remove(child)
        child._parent = None
        self.root.assign_prefix_order()
        child.assign_prefix_order()

    def is_descendant_of(self, ancestor: "WindowContainer") -> bool:
        """Check whether ``ancestor`` is a strict ancestor of this container."""
        node = self._parent
        while node is not None:
            if node is ancestor:
                return True
            node = node._parent
        return False

    def iter_preorder(self) -> Iterator["WindowContainer"]:
        """Yield this container and its descendants, parents first."""
        yield self
        for child in self._children:
            yield from child.iter_preorder()

    def assign_prefix_order(self) -> None:
        """Number every container in this subtree by pre-order position."""
        for index, container in enumerate(self.iter_preorder()):
            container.prefix_order_index = index

    def for_all_leaf_tasks(
        self,
        callback: TaskCallback,
        traverse_top_to_bottom: bool = False,
    ) -> None:
        """Invoke ``callback`` once for every leaf task below this container.

        Args:
            callback: Called with each leaf task.
            traverse_top_to_bottom: Visit top-most children first.
        """
        children = (
            reversed(self._children) if traverse_top_to_bottom else self._children
        )
        for child in list(children):
            child.for_all_leaf_tasks(callback, traverse_top_to_bottom)


class ActivityRecord(WindowContainer):
    """A single activity inside a task.

    Attributes:
        component: Fully qualified component name.
        intent: Intent the activity was started with.
        finishing: Whether the activity is on its way out.
        visible: Whether the activity is currently visible.
    """

    def __init__(
        self,
        component: str,
        intent: Intent | None = None,
        finishing: bool = False,
        visible: bool = False,
    ) -> None:
        super().__init__()
        self.component = component
        self.intent = intent or Intent(component=component)
        self.finishing = finishing
        self.visible = visible

    @property
    def task(self) -> "Task | None":
        """Get the task directly hosting this activity."""
        return self._parent if isinstance(self._parent, Task) else None

    def add_child(
        self, child: WindowContainer, position: int | None = None
    ) -> None:
        msg = "Activity records cannot hold child containers"
        raise TypeError(msg)

    def for_all_leaf_tasks(
        self,
        callback: TaskCallback,
        traverse_top_to_bottom: bool = False,
    ) -> None:
        return

    def __repr__(self) -> str:
        return f"ActivityRecord({self.component!r})"


class Task(WindowContainer):
    """A task: a stack of activities, or a root task holding other tasks.

    A task with no task children is a leaf task; those are the units the
    running task ranker reports on.
    """

    def __init__(
        self,
        task_id: int,
        effective_uid: int,
        user_id: int | None = None,
        activity_type: ActivityType = ActivityType.STANDARD,
        last_active_time: int = 0,
        exclude_from_recents: bool = False,
        clock: Clock = uptime_millis,
    ) -> None:
        super().__init__()
        self.task_id = task_id
        self.effective_uid = effective_uid
        self.user_id = user_id if user_id is not None else user_id_for_uid(effective_uid)
        self.activity_type = activity_type
        self.last_active_time = last_active_time
        self.exclude_from_recents = exclude_from_recents
        self._clock = clock

    @property
    def activities(self) -> list[ActivityRecord]:
        """Get the activities directly in this task, bottom to top."""
        return [c for c in self._children if isinstance(c, ActivityRecord)]

    @property
    def child_tasks(self) -> list["Task"]:
        """Get the tasks nested directly in this task, bottom to top."""
        return [c for c in self._children if isinstance(c, Task)]

    @property
    def is_leaf_task(self) -> bool:
        """Check whether this task holds no other tasks."""
        return not self.child_tasks

    @property
    def num_activities(self) -> int:
        """Get the number of activities directly in this task."""
        return len(self.activities)

    @property
    def root_activity(self) -> ActivityRecord | None:
        """Get the bottom-most activity of this task."""
        activities = self.activities
        return activities[0] if activities else None

    @property
    def top_non_finishing_activity(self) -> ActivityRecord | None:
        """Get the top-most activity below this task that is not finishing."""
        for child in reversed(self._children):
            if isinstance(child, ActivityRecord):
                if not child.finishing:
                    return child
            elif isinstance(child, Task):
                top = child.top_non_finishing_activity
                if top is not None:
                    return top
        return None

    @property
    def is_visible(self) -> bool:
        """Check whether any activity or nested task is visible."""
        for child in self._children:
            if isinstance(child, ActivityRecord) and child.visible:
                return True
            if isinstance(child, Task) and child.is_visible:
                return True
        return False

    def touch_active_time(self) -> None:
        """Set ``last_active_time`` to the current clock reading."""
        self.last_active_time = self._clock()

    def for_all_leaf_tasks(
        self,
        callback: TaskCallback,
        traverse_top_to_bottom: bool = False,
    ) -> None:
        child_tasks = self.child_tasks
        if not child_tasks:
            callback(self)
            return
        if traverse_top_to_bottom:
            child_tasks.reverse()
        for child in child_tasks:
            child.for_all_leaf_tasks(callback, traverse_top_to_bottom)

    def __repr__(self) -> str:
        return f"Task(task_id={self.task_id}, uid={self.effective_uid})"


class DisplayContent(WindowContainer):
    """A display and the tasks shown on it.

    Attributes:
        display_id: Identifier of the display.
        focused_app: Activity holding input focus on this display.
    """

    def __init__(self, display_id: int) -> None:
        super().__init__()
        self.display_id = display_id
        self.focused_app: ActivityRecord | None = None

    @property
    def focused_task(self) -> Task | None:
        """Get the task hosting the focused app, if any."""
        if self.focused_app is None:
            return None
        return self.focused_app.task

    def __repr__(self) -> str:
        return f"DisplayContent(display_id={self.display_id})"


class RootWindowContainer(WindowContainer):
    """Global root holding every display."""

    @property
    def displays(self) -> list[DisplayContent]:
        """Get the displays, bottom to top."""
        return [c for c in self._children if isinstance(c, DisplayContent)]

    def for_all_displays(self, callback: Callable[[DisplayContent], None]) -> None:
        """Invoke ``callback`` for every display, top-most first."""
        for display in reversed(self.displays):
            callback(display)

    def find_task(self, task_id: int) -> Task | None:
        """Find a task anywhere in the tree by id.

        Args:
            task_id: Identifier to look up.

        Returns:
            The matching task, or None.
        """
        for container in self.iter_preorder():
            if isinstance(container, Task) and container.task_id == task_id:
                return container
        return None

    def __repr__(self) -> str:
        return "RootWindowContainer()"
