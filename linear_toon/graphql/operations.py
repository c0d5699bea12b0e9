"""GraphQL documents used against the Linear API.

The documents are fixed at design time (no schema introspection). They are
grouped in one frozen ``Operations`` value; ``DEFAULT_OPERATIONS`` is built
once at import and handed to the resolver, orchestrator and tools.
"""

from __future__ import annotations

from dataclasses import dataclass

from linear_toon.enums import ResolutionKind

_ISSUE_SUMMARY = """
      id identifier title url
      state { name }
      assignee { id name }
      team { id name }
      labels { nodes { name } }
      project { id name }
"""


def _lookup(root: str, filter_type: str) -> str:
    """Build a single-match lookup returning only the node id."""
    return f"query($filter: {filter_type}) {{ {root}(filter: $filter, first: 1) {{ nodes {{ id }} }} }}"


@dataclass(frozen=True, slots=True)
class Lookup:
    """A single-match lookup for one resolution kind.

    Attributes:
        document: GraphQL query text
        root: Top-level field holding ``nodes``
    """

    document: str
    root: str


@dataclass(frozen=True, slots=True)
class Operations:
    """Every GraphQL document the server issues."""

    lookups: dict[ResolutionKind, Lookup]
    viewer: str
    issue_team: str
    get_issue: str
    search_issues: str
    create_issue: str
    update_issue: str
    issue_relations: str
    create_relation: str
    delete_relation: str
    attach_link: str
    create_comment: str
    list_teams: str
    list_users: str
    team_members: str
    list_states: str
    list_labels: str
    list_projects: str
    list_cycles: str

    def lookup(self, kind: ResolutionKind) -> Lookup:
        return self.lookups[kind]


DEFAULT_OPERATIONS = Operations(
    lookups={
        ResolutionKind.TEAM: Lookup(_lookup("teams", "TeamFilter"), "teams"),
        ResolutionKind.USER: Lookup(_lookup("users", "UserFilter"), "users"),
        ResolutionKind.STATE: Lookup(_lookup("workflowStates", "WorkflowStateFilter"), "workflowStates"),
        ResolutionKind.LABEL: Lookup(_lookup("issueLabels", "IssueLabelFilter"), "issueLabels"),
        ResolutionKind.PROJECT: Lookup(_lookup("projects", "ProjectFilter"), "projects"),
        ResolutionKind.CYCLE: Lookup(_lookup("cycles", "CycleFilter"), "cycles"),
        ResolutionKind.MILESTONE: Lookup(
            _lookup("projectMilestones", "ProjectMilestoneFilter"), "projectMilestones"
        ),
    },
    viewer="query { viewer { id } }",
    issue_team="query($id: String!) { issue(id: $id) { team { id } } }",
    get_issue="""
query($id: String!) {
  issue(id: $id) {
    id identifier title description priority priorityLabel url branchName
    createdAt updatedAt archivedAt completedAt dueDate
    state { name }
    assignee { id name }
    creator { id name }
    labels { nodes { name } }
    project { id name }
    team { id name }
    attachments { nodes { id title url } }
  }
}
""",
    search_issues="""
query($filter: IssueFilter, $first: Int, $after: String, $orderBy: PaginationOrderBy, $includeArchived: Boolean) {
  issues(filter: $filter, first: $first, after: $after, orderBy: $orderBy, includeArchived: $includeArchived) {
    nodes {
      id identifier title priority priorityLabel url createdAt updatedAt
      state { name }
      assignee { id name }
      labels { nodes { name } }
      project { id name }
      team { id name }
    }
    pageInfo { hasNextPage endCursor }
  }
}
""",
    create_issue=f"""
mutation($input: IssueCreateInput!) {{
  issueCreate(input: $input) {{
    success
    issue {{{_ISSUE_SUMMARY}    }}
  }}
}}
""",
    update_issue=f"""
mutation($id: String!, $input: IssueUpdateInput!) {{
  issueUpdate(id: $id, input: $input) {{
    success
    issue {{{_ISSUE_SUMMARY}    }}
  }}
}}
""",
    issue_relations="""
query($id: String!) {
  issue(id: $id) { relations { nodes { id type relatedIssue { id } } } }
}
""",
    create_relation="""
mutation($input: IssueRelationCreateInput!) {
  issueRelationCreate(input: $input) { success }
}
""",
    delete_relation="""
mutation($id: String!) {
  issueRelationDelete(id: $id) { success }
}
""",
    attach_link="""
mutation($url: String!, $issueId: String!, $title: String) {
  attachmentLinkURL(url: $url, issueId: $issueId, title: $title) { success }
}
""",
    create_comment="""
mutation($input: CommentCreateInput!) {
  commentCreate(input: $input) {
    success
    comment { id body createdAt user { id name } issue { id identifier } }
  }
}
""",
    list_teams="query { teams { nodes { id name key } } }",
    list_users="query { users { nodes { id name email } } }",
    team_members="query($id: String!) { team(id: $id) { members { nodes { id name email } } } }",
    list_states="query($filter: WorkflowStateFilter) { workflowStates(filter: $filter) { nodes { id type name } } }",
    list_labels="query($filter: IssueLabelFilter) { issueLabels(filter: $filter) { nodes { id name } } }",
    list_projects="query($filter: ProjectFilter) { projects(filter: $filter) { nodes { id name state } } }",
    list_cycles="query($filter: CycleFilter) { cycles(filter: $filter) { nodes { id name number startsAt endsAt } } }",
)
