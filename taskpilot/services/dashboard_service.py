from taskpilot.constants.role import Role
from taskpilot.dto.responses.dashboard_response import DashboardStatsResponse, StatusCountDTO
from taskpilot.repositories.project_repository import ProjectRepository
from taskpilot.repositories.task_repository import TaskRepository
from taskpilot.repositories.user_repository import UserRepository


class DashboardService:
    @classmethod
    def get_stats(cls) -> DashboardStatsResponse:
        return DashboardStatsResponse(
            totalProjects=ProjectRepository.count(),
            totalTasks=TaskRepository.count(),
            totalTeamMembers=UserRepository.count_by_role(Role.TEAM_MEMBER.value),
            taskStatusBreakdown=[
                StatusCountDTO(status=item["_id"], count=item["count"]) for item in TaskRepository.count_by_status()
            ],
        )
