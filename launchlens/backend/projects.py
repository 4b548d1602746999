
import itertools
from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional
from schemas import Project, ProjectCreate

WINDOW_DAYS = 7


class ProjectStore:
	"""In-process store of saved evaluations, scoped by owner."""

	def __init__(self):
		self._projects: Dict[int, Project] = {}
		self._ids = itertools.count(1)
		self.evaluation_counts: Counter = Counter()

	def save(self, owner: str, data: ProjectCreate, now: Optional[datetime] = None) -> Project:
		now = now or datetime.now(timezone.utc)
		project = Project(
			id=next(self._ids),
			owner=owner,
			name=data.name,
			description=data.description,
			answers=data.answers,
			evaluation_data=data.evaluation_data,
			overall_score=data.overall_score,
			created_at=now,
			updated_at=now,
		)
		self._projects[project.id] = project
		return project

	def list_for(self, owner: str) -> List[Project]:
		owned = [p for p in self._projects.values() if p.owner == owner]
		return sorted(owned, key=lambda p: p.created_at, reverse=True)

	def get(self, owner: str, project_id: int) -> Optional[Project]:
		project = self._projects.get(project_id)
		if project is None or project.owner != owner:
			return None
		return project

	def delete(self, owner: str, project_id: int) -> bool:
		if self.get(owner, project_id) is None:
			return False
		del self._projects[project_id]
		return True

	def all(self) -> List[Project]:
		return list(self._projects.values())

	def record_evaluation(self, day: Optional[date] = None):
		day = day or datetime.now(timezone.utc).date()
		self.evaluation_counts[day] += 1
		oldest = max(self.evaluation_counts) - timedelta(days=WINDOW_DAYS - 1)
		for stale in [d for d in self.evaluation_counts if d < oldest]:
			del self.evaluation_counts[stale]
