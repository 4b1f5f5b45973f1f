"""Reply threads and phase grouping for rendering a run's messages."""

from dataclasses import dataclass, field

from ..models import AgentMessage


@dataclass
class MessageThread:
    """A message and its replies."""

    message: AgentMessage
    replies: list["MessageThread"] = field(default_factory=list)

    def walk(self):
        """Yield (depth, message) in display order."""
        stack = [(0, self)]
        while stack:
            depth, node = stack.pop()
            yield depth, node.message
            for reply in reversed(node.replies):
                stack.append((depth + 1, reply))


def build_threads(messages: list[AgentMessage]) -> list[MessageThread]:
    """Arrange messages into reply trees, keeping input order among siblings.

    Messages whose parent is missing from the set become roots. Parent links
    are not trusted to be acyclic: a message on a cycle is shown once, as a
    root.
    """
    by_id = {m.id: m for m in messages}
    children: dict[str, list[AgentMessage]] = {}
    roots: list[AgentMessage] = []

    for message in messages:
        parent_id = message.parent_id
        if parent_id and parent_id in by_id and parent_id != message.id:
            children.setdefault(parent_id, []).append(message)
        else:
            roots.append(message)

    placed: set[str] = set()

    def attach(message: AgentMessage) -> MessageThread:
        placed.add(message.id)
        node = MessageThread(message)
        for child in children.get(message.id, []):
            if child.id not in placed:
                node.replies.append(attach(child))
        return node

    threads = [attach(root) for root in roots]

    # Whatever is left hangs off a cycle and never reached a root
    for message in messages:
        if message.id not in placed:
            threads.append(attach(message))

    return threads


def group_by_phase(messages: list[AgentMessage]) -> dict[int, list[AgentMessage]]:
    """Group messages by pipeline phase, keeping input order in each group."""
    groups: dict[int, list[AgentMessage]] = {}
    for message in messages:
        groups.setdefault(message.phase, []).append(message)
    return groups
