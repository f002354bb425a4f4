class RevisionError(Exception):
    """Base class for revision scheduling failures."""


class DuplicatePendingError(RevisionError):
    """A Pending record already exists for (owner, problem, cycle)."""

    def __init__(self, owner_id, problem_id, cycle):
        self.owner_id = owner_id
        self.problem_id = problem_id
        self.cycle = cycle
        super().__init__(
            f"pending {cycle} revision already exists for problem {problem_id}"
        )


class AlreadyScheduledError(DuplicatePendingError):
    pass


class NotFoundError(RevisionError):
    """Record is absent, owned by someone else, or no longer pending."""
