"""Composite issue mutations.

Creates and updates are multi-step: resolve every referenced entity, write
the issue, then write relation edges and link attachments one call at a
time. Steps run strictly in sequence. A failing step stops the plan and
raises an error naming that step; steps that already ran stay applied,
since the API offers no transactions.
"""

from __future__ import annotations

from typing import Any

import structlog

from linear_toon.client import Transport
from linear_toon.enums import RELATION_ORDER, RelationKind, ResolutionKind
from linear_toon.exceptions import (
    ConflictingAssigneeError,
    CreationFailedError,
    IssueTeamUnavailableError,
    LinkFailedError,
    MilestoneRequiresProjectError,
    RelationCreateFailedError,
    RelationDeleteFailedError,
    RelationFailedError,
    UnexpectedResponseError,
    UpdateFailedError,
)
from linear_toon.graphql.operations import DEFAULT_OPERATIONS, Operations
from linear_toon.models.requests import CreateIssueRequest, LinkInput, UpdateIssueRequest
from linear_toon.orchestration.plan import (
    LinkAttach,
    MutationPlan,
    PrimaryWrite,
    RelationCreate,
    RelationReplace,
)
from linear_toon.resolution.resolver import ReferenceResolver

log = structlog.get_logger(__name__)

# Request attribute -> input field for values sent as given.
DIRECT_FIELDS = {
    "title": "title",
    "description": "description",
    "priority": "priority",
    "estimate": "estimate",
    "due_date": "dueDate",
    "parent_id": "parentId",
}

# Update attributes that may be sent as null to clear the attribute.
NULLABLE_FIELDS = frozenset(
    {
        "description",
        "estimate",
        "due_date",
        "parent_id",
        "assignee",
        "delegate",
        "project",
        "cycle",
        "milestone",
        "duplicate_of",
    }
)


class MutationOrchestrator:
    """Plan and execute issue creates and updates.

    Example:
        >>> orchestrator = MutationOrchestrator(client)
        >>> issue = await orchestrator.create(CreateIssueRequest(title="Crash on save", team="Mobile"))
    """

    def __init__(
        self,
        client: Transport,
        resolver: ReferenceResolver | None = None,
        operations: Operations = DEFAULT_OPERATIONS,
    ) -> None:
        """Initialize orchestrator.

        Args:
            client: Transport for every write
            resolver: Reference resolver (built on ``client`` when omitted)
            operations: GraphQL documents
        """
        self.client = client
        self.operations = operations
        self.resolver = resolver or ReferenceResolver(client, operations)

    # === Create ===

    async def create(self, request: CreateIssueRequest) -> dict[str, Any]:
        """Create an issue with its relations and links.

        Returns:
            The created issue summary

        Raises:
            ConflictingAssigneeError: Both assignee and delegate were given
            MilestoneRequiresProjectError: Milestone without project
            ResolutionError: A referenced entity could not be resolved
            CreationFailedError: The create call reported failure
            RelationFailedError: An edge could not be added (issue remains)
            LinkFailedError: A link could not be attached (issue remains)
        """
        plan = await self.plan_create(request)
        return await self.execute(plan)

    async def plan_create(self, request: CreateIssueRequest) -> MutationPlan:
        if request.assignee is not None and request.delegate is not None:
            raise ConflictingAssigneeError()
        if request.milestone is not None and request.project is None:
            raise MilestoneRequiresProjectError()

        team_id = await self.resolver.resolve(ResolutionKind.TEAM, request.team)
        issue_input: dict[str, Any] = {"title": request.title, "teamId": team_id}

        for attr, key in DIRECT_FIELDS.items():
            value = getattr(request, attr)
            if attr != "title" and value is not None:
                issue_input[key] = value

        user = request.assignee if request.assignee is not None else request.delegate
        if user is not None:
            issue_input["assigneeId"] = await self.resolver.resolve(ResolutionKind.USER, user)
        if request.state is not None:
            issue_input["stateId"] = await self.resolver.resolve(ResolutionKind.STATE, request.state, team_id)
        if request.provided("labels"):
            issue_input["labelIds"] = await self.resolver.resolve_labels(request.labels or [])

        project_id = None
        if request.project is not None:
            project_id = await self.resolver.resolve(ResolutionKind.PROJECT, request.project)
            issue_input["projectId"] = project_id
        if request.cycle is not None:
            issue_input["cycleId"] = await self.resolver.resolve(ResolutionKind.CYCLE, request.cycle, team_id)
        if request.milestone is not None and project_id is not None:
            issue_input["projectMilestoneId"] = await self.resolver.resolve(
                ResolutionKind.MILESTONE, request.milestone, project_id
            )

        targets = _relation_targets(request)
        return MutationPlan(
            primary=PrimaryWrite("create", issue_input),
            relations=[RelationCreate(kind, target) for kind in RELATION_ORDER for target in targets[kind]],
            links=_links(request.links),
        )

    # === Update ===

    async def update(self, request: UpdateIssueRequest) -> dict[str, Any]:
        """Apply a partial update.

        Omitted parameters are left alone; relation kinds that are present
        replace every existing edge of that kind.

        Returns:
            The updated issue summary

        Raises:
            ConflictingAssigneeError: Both assignee and delegate were given
            MilestoneRequiresProjectError: Milestone without project
            IssueTeamUnavailableError: State/cycle given but the issue team is unknown
            UpdateFailedError: The update call reported failure
            RelationDeleteFailedError: An existing edge could not be removed
            RelationCreateFailedError: A replacement edge could not be added
            LinkFailedError: A link could not be attached
        """
        plan = await self.plan_update(request)
        return await self.execute(plan)

    async def plan_update(self, request: UpdateIssueRequest) -> MutationPlan:
        if request.provided("assignee") and request.provided("delegate"):
            raise ConflictingAssigneeError()
        if request.milestone is not None and request.project is None:
            raise MilestoneRequiresProjectError()

        issue_input: dict[str, Any] = {}
        for attr, key in DIRECT_FIELDS.items():
            if _present(request, attr):
                issue_input[key] = getattr(request, attr)

        team_id = await self._update_scope(request)
        if request.team is not None:
            issue_input["teamId"] = team_id

        for attr in ("assignee", "delegate"):
            if _present(request, attr):
                user = getattr(request, attr)
                issue_input["assigneeId"] = (
                    await self.resolver.resolve(ResolutionKind.USER, user) if user is not None else None
                )
        if request.state is not None:
            issue_input["stateId"] = await self.resolver.resolve(ResolutionKind.STATE, request.state, team_id)
        if request.labels is not None:
            issue_input["labelIds"] = await self.resolver.resolve_labels(request.labels)

        project_id = None
        if _present(request, "project"):
            if request.project is not None:
                project_id = await self.resolver.resolve(ResolutionKind.PROJECT, request.project)
            issue_input["projectId"] = project_id
        if _present(request, "milestone"):
            milestone_id = None
            if request.milestone is not None:
                if project_id is None:
                    raise MilestoneRequiresProjectError()
                milestone_id = await self.resolver.resolve(ResolutionKind.MILESTONE, request.milestone, project_id)
            issue_input["projectMilestoneId"] = milestone_id
        if _present(request, "cycle"):
            issue_input["cycleId"] = (
                await self.resolver.resolve(ResolutionKind.CYCLE, request.cycle, team_id)
                if request.cycle is not None
                else None
            )

        targets = _relation_targets(request)
        return MutationPlan(
            primary=PrimaryWrite("update", issue_input, issue_id=request.id),
            relations=[
                RelationReplace(kind, tuple(targets[kind]))
                for kind in RELATION_ORDER
                if request.provided(kind.request_attr)
            ],
            links=_links(request.links),
        )

    async def _update_scope(self, request: UpdateIssueRequest) -> str | None:
        """Team id for scoped lookups: the requested team or the issue's own."""
        if request.team is not None:
            return await self.resolver.resolve(ResolutionKind.TEAM, request.team)
        if request.state is None and request.cycle is None:
            return None

        data = await self.client.execute(self.operations.issue_team, {"id": request.id})
        team_id = ((data.get("issue") or {}).get("team") or {}).get("id")
        if not team_id:
            raise IssueTeamUnavailableError(request.id)
        log.debug("issue_team_fetched", issue_id=request.id)
        return team_id

    # === Execution ===

    async def execute(self, plan: MutationPlan) -> dict[str, Any]:
        """Run a plan step by step.

        Returns:
            Issue summary from the primary write
        """
        issue = await self._write_primary(plan.primary)
        subject_id = issue.get("id") or plan.primary.issue_id
        creating = plan.primary.action == "create"

        for step in plan.side_effects():
            if isinstance(step, RelationCreate):
                if not await self._create_relation(subject_id, step.kind, step.target):
                    raise RelationFailedError(step.kind.value, step.target, subject_id if creating else None)
            elif isinstance(step, RelationReplace):
                await self._replace_relations(subject_id, step)
            elif isinstance(step, LinkAttach):
                await self._attach_link(subject_id, step)
            else:
                raise TypeError(f"Unhandled plan step: {step!r}")

        log.info("issue_mutation_applied", action=plan.primary.action, issue_id=subject_id, steps=len(plan))
        return issue

    async def _write_primary(self, primary: PrimaryWrite) -> dict[str, Any]:
        if primary.action == "create":
            data = await self.client.execute(self.operations.create_issue, {"input": primary.input})
            result = _payload(data, "issueCreate")
            if not result.get("success"):
                raise CreationFailedError("issue")
        else:
            assert primary.issue_id is not None
            data = await self.client.execute(
                self.operations.update_issue, {"id": primary.issue_id, "input": primary.input}
            )
            result = _payload(data, "issueUpdate")
            if not result.get("success"):
                raise UpdateFailedError(primary.issue_id)

        issue = result.get("issue") or {}
        log.info("issue_written", action=primary.action, issue_id=issue.get("id"), identifier=issue.get("identifier"))
        return issue

    async def _create_relation(self, issue_id: str, kind: RelationKind, target: str) -> bool:
        relation_input = {"issueId": issue_id, "relatedIssueId": target, "type": kind.value}
        data = await self.client.execute(self.operations.create_relation, {"input": relation_input})
        succeeded = bool((data.get("issueRelationCreate") or {}).get("success"))
        if succeeded:
            log.info("relation_created", issue_id=issue_id, kind=kind.value, target=target)
        else:
            log.warning("relation_create_failed", issue_id=issue_id, kind=kind.value, target=target)
        return succeeded

    async def _replace_relations(self, issue_id: str, step: RelationReplace) -> None:
        data = await self.client.execute(self.operations.issue_relations, {"id": issue_id})
        existing = ((data.get("issue") or {}).get("relations") or {}).get("nodes") or []

        for relation in existing:
            if relation.get("type") != step.kind.value:
                continue
            deleted = await self.client.execute(self.operations.delete_relation, {"id": relation["id"]})
            if not (deleted.get("issueRelationDelete") or {}).get("success"):
                raise RelationDeleteFailedError(step.kind.value, relation["id"])
            log.info("relation_deleted", issue_id=issue_id, kind=step.kind.value, relation_id=relation["id"])

        for target in step.targets:
            if not await self._create_relation(issue_id, step.kind, target):
                raise RelationCreateFailedError(step.kind.value, target)

    async def _attach_link(self, issue_id: str, link: LinkAttach) -> None:
        data = await self.client.execute(
            self.operations.attach_link,
            {"url": link.url, "issueId": issue_id, "title": link.title},
        )
        if not (data.get("attachmentLinkURL") or {}).get("success"):
            raise LinkFailedError(link.url)
        log.info("link_attached", issue_id=issue_id, url=link.url)


def _present(request: UpdateIssueRequest, attr: str) -> bool:
    """Present and meaningful: nullable fields count when null, others only when set."""
    if not request.provided(attr):
        return False
    return attr in NULLABLE_FIELDS or getattr(request, attr) is not None


def _relation_targets(request: CreateIssueRequest | UpdateIssueRequest) -> dict[RelationKind, list[str]]:
    duplicate = [request.duplicate_of] if request.duplicate_of is not None else []
    return {
        RelationKind.BLOCKED_BY: list(request.blocked_by or []),
        RelationKind.BLOCKS: list(request.blocks or []),
        RelationKind.RELATED: list(request.related_to or []),
        RelationKind.DUPLICATE: duplicate,
    }


def _links(links: list[LinkInput] | None) -> list[LinkAttach]:
    return [LinkAttach(url=link.url, title=link.title) for link in links or []]


def _payload(data: dict[str, Any], field: str) -> dict[str, Any]:
    result = data.get(field)
    if result is None:
        raise UnexpectedResponseError(field)
    return result
