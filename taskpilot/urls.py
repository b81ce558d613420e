from django.urls import path

from taskpilot.socket.server import get_event_bus, get_presence_directory
from taskpilot.views.auth import AuthProfileView, AuthTeamMembersView, LoginView, RegisterView
from taskpilot.views.chat import (
    ChatAvailableUsersView,
    ChatDetailView,
    ChatMessagesView,
    ChatReadView,
    ChatUnreadCountView,
    CreateChatView,
    CreateTeamChatView,
    MessageDetailView,
    MessageReadView,
    OnlineUsersView,
    SendMessageView,
    UserChatsView,
)
from taskpilot.views.contact import ContactAdminDetailView, ContactAdminListView, ContactAdminStatusView, ContactView
from taskpilot.views.dashboard import DashboardStatsView
from taskpilot.views.health import HealthView
from taskpilot.views.notification import (
    NotificationClearAllView,
    NotificationDetailView,
    NotificationListView,
    NotificationMarkAllReadView,
    NotificationReadView,
    NotificationUnreadCountView,
)
from taskpilot.views.password_reset import ForgotPasswordView, ResetPasswordView, VerifyResetTokenView
from taskpilot.views.project import (
    MyProjectsView,
    ProjectAttachmentDetailView,
    ProjectAttachmentDownloadView,
    ProjectAttachmentPreviewView,
    ProjectCommentDetailView,
    ProjectCommentListView,
    ProjectDetailView,
    ProjectListView,
    ProjectTeamMembersView,
    ProjectUploadView,
)
from taskpilot.views.task import (
    ManagerProjectTasksView,
    ManagerTasksView,
    MyProjectTasksView,
    MyTasksView,
    TaskAttachmentDetailView,
    TaskAttachmentDownloadView,
    TaskAttachmentPreviewView,
    TaskCommentDetailView,
    TaskCommentListView,
    TaskDetailView,
    TaskListView,
    TasksByDueDateView,
    TaskUploadView,
)
from taskpilot.views.team import (
    SignupTeamsView,
    TeamAvailableManagersView,
    TeamAvailableUsersView,
    TeamDetailView,
    TeamListView,
    TeamMemberDetailView,
    TeamMembersView,
)
from taskpilot.views.user import (
    ManagerUsersView,
    MyTeamManagersView,
    MyTeamMembersView,
    ProfileImageUploadView,
    TeamMemberUsersView,
    UserProfileView,
    UserRoleView,
    UsersView,
)

# Literal segments are listed before the <str:...> routes they would otherwise be captured by.
urlpatterns = [
    path("health", HealthView.as_view(), name="health"),
    # auth
    path("auth/register", RegisterView.as_view(), name="register"),
    path("auth/login", LoginView.as_view(), name="login"),
    path("auth/profile", AuthProfileView.as_view(), name="auth_profile"),
    path("auth/team-members", AuthTeamMembersView.as_view(), name="auth_team_members"),
    # users
    path("users", UsersView.as_view(), name="users"),
    path("users/team-members", TeamMemberUsersView.as_view(), name="user_team_members"),
    path("users/managers", ManagerUsersView.as_view(), name="user_managers"),
    path("users/my-team-members", MyTeamMembersView.as_view(), name="my_team_members"),
    path("users/my-team-managers", MyTeamManagersView.as_view(), name="my_team_managers"),
    path("users/profile", UserProfileView.as_view(), name="user_profile"),
    path("users/<str:user_id>/role", UserRoleView.as_view(), name="user_role"),
    path("upload-profile-image", ProfileImageUploadView.as_view(), name="upload_profile_image"),
    # teams
    path("teams", TeamListView.as_view(), name="teams"),
    path("teams/available-users", TeamAvailableUsersView.as_view(), name="team_available_users"),
    path("teams/managers", TeamAvailableManagersView.as_view(), name="team_available_managers"),
    path("teams/signup-teams", SignupTeamsView.as_view(), name="signup_teams"),
    path("teams/<str:team_id>", TeamDetailView.as_view(), name="team_detail"),
    path("teams/<str:team_id>/members", TeamMembersView.as_view(), name="team_members"),
    path("teams/<str:team_id>/members/<str:member_id>", TeamMemberDetailView.as_view(), name="team_member_detail"),
    # projects
    path("projects", ProjectListView.as_view(), name="projects"),
    path("projects/my-projects", MyProjectsView.as_view(), name="my_projects"),
    path("projects/<str:project_id>", ProjectDetailView.as_view(), name="project_detail"),
    path("projects/<str:project_id>/team-members", ProjectTeamMembersView.as_view(), name="project_team_members"),
    path("projects/<str:project_id>/comments", ProjectCommentListView.as_view(), name="project_comments"),
    path(
        "projects/<str:project_id>/comments/<str:comment_id>",
        ProjectCommentDetailView.as_view(),
        name="project_comment_detail",
    ),
    path("projects/<str:project_id>/upload", ProjectUploadView.as_view(), name="project_upload"),
    path(
        "projects/<str:project_id>/attachments/<str:attachment_id>",
        ProjectAttachmentDetailView.as_view(),
        name="project_attachment_detail",
    ),
    path(
        "projects/<str:project_id>/attachments/<str:attachment_id>/download",
        ProjectAttachmentDownloadView.as_view(),
        name="project_attachment_download",
    ),
    path(
        "projects/<str:project_id>/attachments/<str:attachment_id>/preview",
        ProjectAttachmentPreviewView.as_view(),
        name="project_attachment_preview",
    ),
    # tasks
    path("tasks", TaskListView.as_view(), name="tasks"),
    path("tasks/my-tasks", MyTasksView.as_view(), name="my_tasks"),
    path("tasks/due-date", TasksByDueDateView.as_view(), name="tasks_due_date"),
    path("tasks/calendar/tasks", TasksByDueDateView.as_view(), name="tasks_calendar"),
    path("tasks/manager-tasks", ManagerTasksView.as_view(), name="manager_tasks"),
    path("tasks/manager-project/<str:project_id>", ManagerProjectTasksView.as_view(), name="manager_project_tasks"),
    path("tasks/project/<str:project_id>/user", MyProjectTasksView.as_view(), name="my_project_tasks"),
    path("tasks/<str:task_id>", TaskDetailView.as_view(), name="task_detail"),
    path("tasks/<str:task_id>/comments", TaskCommentListView.as_view(), name="task_comments"),
    path("tasks/<str:task_id>/comments/<str:comment_id>", TaskCommentDetailView.as_view(), name="task_comment_detail"),
    path("tasks/<str:task_id>/upload", TaskUploadView.as_view(), name="task_upload"),
    path(
        "tasks/<str:task_id>/attachments/<str:attachment_id>",
        TaskAttachmentDetailView.as_view(),
        name="task_attachment_detail",
    ),
    path(
        "tasks/<str:task_id>/attachments/<str:attachment_id>/download",
        TaskAttachmentDownloadView.as_view(),
        name="task_attachment_download",
    ),
    path(
        "tasks/<str:task_id>/attachments/<str:attachment_id>/preview",
        TaskAttachmentPreviewView.as_view(),
        name="task_attachment_preview",
    ),
    # chats
    path("chats/user-chats", UserChatsView.as_view(), name="user_chats"),
    path("chats/create-chat", CreateChatView.as_view(), name="create_chat"),
    path("chats/create-team-chat", CreateTeamChatView.as_view(), name="create_team_chat"),
    path("chats/available-users", ChatAvailableUsersView.as_view(), name="chat_available_users"),
    path("chats/online-users", OnlineUsersView.as_view(presence=get_presence_directory()), name="online_users"),
    path("chats/unread-count", ChatUnreadCountView.as_view(), name="chat_unread_count"),
    path("chats/messages", SendMessageView.as_view(event_bus=get_event_bus()), name="send_message"),
    path("chats/messages/<str:message_id>", MessageDetailView.as_view(), name="message_detail"),
    path("chats/messages/<str:message_id>/read", MessageReadView.as_view(), name="message_read"),
    path("chats/<str:chat_id>", ChatDetailView.as_view(), name="chat_detail"),
    path("chats/<str:chat_id>/read", ChatReadView.as_view(), name="chat_read"),
    path("chats/<str:chat_id>/messages", ChatMessagesView.as_view(), name="chat_messages"),
    # notifications
    path("notifications", NotificationListView.as_view(), name="notifications"),
    path("notifications/clear-all", NotificationClearAllView.as_view(), name="notifications_clear_all"),
    path("notifications/mark-all-read", NotificationMarkAllReadView.as_view(), name="notifications_mark_all_read"),
    path("notifications/unread-count", NotificationUnreadCountView.as_view(), name="notifications_unread_count"),
    path("notifications/<str:notification_id>", NotificationDetailView.as_view(), name="notification_detail"),
    path("notifications/<str:notification_id>/read", NotificationReadView.as_view(), name="notification_read"),
    # contact
    path("contact", ContactView.as_view(), name="contact"),
    path("contact/admin", ContactAdminListView.as_view(), name="contact_admin"),
    path("contact/admin/<str:contact_id>", ContactAdminDetailView.as_view(), name="contact_admin_detail"),
    path("contact/admin/<str:contact_id>/status", ContactAdminStatusView.as_view(), name="contact_admin_status"),
    # password reset
    path("password-reset/forgot-password", ForgotPasswordView.as_view(), name="forgot_password"),
    path("password-reset/reset-password/<str:token>", ResetPasswordView.as_view(), name="reset_password"),
    path("password-reset/verify-reset-token/<str:token>", VerifyResetTokenView.as_view(), name="verify_reset_token"),
    # dashboard
    path("dashboard/stats", DashboardStatsView.as_view(), name="dashboard_stats"),
]
