"""
Task commands.

Usage:
    productive tasks list --assignee jane@example.com --project PRJ-12
    productive tasks add "Fix login" --project PRJ-12 --task-list 345
    productive tasks update 678 --assignee "John Doe"
"""

from __future__ import annotations

from typing import Annotated

import typer

from src.cli.commands.common import (
    FilterOption,
    PageOption,
    SizeOption,
    SortOption,
    parse_filters,
)
from src.cli.session import execute_command
from src.productive_core.executors import (
    CreateTaskOptions,
    GetTaskOptions,
    ListTasksOptions,
    UpdateTaskOptions,
    create_task,
    get_task,
    list_tasks,
    update_task,
)

tasks_app = typer.Typer(name="tasks", help="Task commands", no_args_is_help=True)

AssigneeOption = Annotated[
    str | None, typer.Option("--assignee", help="Assignee ID, email or name")
]
DescriptionOption = Annotated[str | None, typer.Option("--description", help="Description")]
DueOption = Annotated[str | None, typer.Option("--due", help="Due date (YYYY-MM-DD)")]
StartOption = Annotated[str | None, typer.Option("--start", help="Start date (YYYY-MM-DD)")]
EstimateOption = Annotated[
    int | None, typer.Option("--estimate", help="Initial estimate in minutes")
]
WorkflowStatusOption = Annotated[
    str | None, typer.Option("--workflow-status", help="Workflow status ID")
]


@tasks_app.command("list")
def tasks_list(
    ctx: typer.Context,
    assignee: AssigneeOption = None,
    creator: Annotated[str | None, typer.Option(help="Creator ID, email or name")] = None,
    project: Annotated[str | None, typer.Option(help="Project ID, number or name")] = None,
    company: Annotated[str | None, typer.Option(help="Company ID or name")] = None,
    board: Annotated[str | None, typer.Option(help="Board ID")] = None,
    task_list: Annotated[str | None, typer.Option("--task-list", help="Task list ID")] = None,
    workflow_status: WorkflowStatusOption = None,
    status: Annotated[str | None, typer.Option(help="open (default) or completed")] = None,
    overdue: Annotated[bool, typer.Option("--overdue", help="Only overdue tasks")] = False,
    due: Annotated[str | None, typer.Option("--due", help="Due on date")] = None,
    due_before: Annotated[str | None, typer.Option("--due-before", help="Due before")] = None,
    due_after: Annotated[str | None, typer.Option("--due-after", help="Due after")] = None,
    page: PageOption = 1,
    size: SizeOption = 100,
    sort: SortOption = None,
    filter: FilterOption = None,
) -> None:
    """List tasks (open tasks unless --status is given)."""
    options = ListTasksOptions(
        page=page,
        per_page=size,
        sort=sort,
        additional_filters=parse_filters(filter),
        assignee_id=assignee,
        creator_id=creator,
        project_id=project,
        company_id=company,
        board_id=board,
        task_list_id=task_list,
        workflow_status_id=workflow_status,
        status=status,
        overdue=overdue,
        due_date=due,
        due_before=due_before,
        due_after=due_after,
    )
    execute_command(ctx, list_tasks, options, title="Tasks")


@tasks_app.command("get")
def tasks_get(
    ctx: typer.Context,
    task: Annotated[str, typer.Argument(help="Task ID")],
) -> None:
    """Show one task."""
    execute_command(ctx, get_task, GetTaskOptions(id=task), title="task")


@tasks_app.command("add")
def tasks_add(
    ctx: typer.Context,
    title: Annotated[str, typer.Argument(help="Task title")],
    project: Annotated[str, typer.Option(help="Project ID, number or name")],
    task_list: Annotated[str, typer.Option("--task-list", help="Task list ID")],
    assignee: AssigneeOption = None,
    description: DescriptionOption = None,
    due: DueOption = None,
    start: StartOption = None,
    estimate: EstimateOption = None,
    workflow_status: WorkflowStatusOption = None,
    private: Annotated[bool, typer.Option("--private", help="Private task")] = False,
) -> None:
    """Create a task."""
    options = CreateTaskOptions(
        title=title,
        project_id=project,
        task_list_id=task_list,
        assignee_id=assignee,
        description=description,
        due_date=due,
        start_date=start,
        initial_estimate=estimate,
        workflow_status_id=workflow_status,
        private=private or None,
    )
    execute_command(ctx, create_task, options, title="task")


@tasks_app.command("update")
def tasks_update(
    ctx: typer.Context,
    task: Annotated[str, typer.Argument(help="Task ID")],
    title: Annotated[str | None, typer.Option("--title", help="New title")] = None,
    assignee: AssigneeOption = None,
    description: DescriptionOption = None,
    due: DueOption = None,
    start: StartOption = None,
    estimate: EstimateOption = None,
    workflow_status: WorkflowStatusOption = None,
    closed: Annotated[
        bool | None, typer.Option("--closed/--reopen", help="Close or reopen the task")
    ] = None,
) -> None:
    """Update a task."""
    options = UpdateTaskOptions(
        id=task,
        title=title,
        assignee_id=assignee,
        description=description,
        due_date=due,
        start_date=start,
        initial_estimate=estimate,
        workflow_status_id=workflow_status,
        closed=closed,
    )
    execute_command(ctx, update_task, options, title="task")
