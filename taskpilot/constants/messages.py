# Application Messages
class AppMessages:
    USER_REGISTERED = "User registered successfully"
    LOGIN_SUCCESSFUL = "Login successful"
    PROFILE_UPDATED = "Profile updated successfully"
    ROLE_UPDATED = "User role updated from {0} to {1}"
    TEAM_CREATED = "Team created successfully"
    TEAM_MEMBER_ADDED = "Member added to team successfully"
    TEAM_MEMBER_REMOVED = "Member removed from team successfully"
    PROJECT_CREATED = "Project created successfully"
    PROJECT_UPDATED = "Project updated successfully"
    PROJECT_DELETED = "Project deleted successfully"
    TASK_CREATED = "Task created successfully"
    TASK_UPDATED = "Task updated successfully"
    TASK_DELETED = "Task deleted successfully"
    COMMENT_ADDED = "Comment added successfully"
    COMMENT_DELETED = "Comment deleted successfully"
    ATTACHMENT_UPLOADED = "File uploaded successfully"
    ATTACHMENT_DELETED = "Attachment deleted successfully"
    CHAT_MARKED_READ = "Messages marked as read"
    CHAT_DELETED = "Chat deleted successfully"
    MESSAGE_MARKED_READ = "Message marked as read"
    MESSAGE_DELETED = "Message deleted successfully"
    NOTIFICATION_MARKED_READ = "Notification marked as read"
    NOTIFICATIONS_MARKED_READ = "All notifications marked as read"
    NOTIFICATION_DELETED = "Notification deleted"
    NOTIFICATIONS_CLEARED = "All notifications cleared"
    CONTACT_SUBMITTED = "Thank you for contacting us! We will get back to you soon."
    CONTACT_STATUS_UPDATED = "Contact status updated"
    CONTACT_DELETED = "Contact message deleted"
    RESET_EMAIL_SENT = "If an account with that email exists, a password reset link has been sent."
    RESET_LINK_GENERATED = "Password reset link generated successfully"
    RESET_LINK_NOTE = "Email service is not configured. Use the link below to reset your password."
    PASSWORD_RESET_SUCCESSFUL = "Password has been reset successfully"
    RESET_TOKEN_VALID = "Token is valid"


# Repository error messages
class RepositoryErrors:
    DB_INIT_FAILED = "Failed to initialize database: {0}"
    NOTIFICATION_WRITE_FAILED = "Dropped notifications from {0}: {1}"


# API error messages
class ApiErrors:
    SERVER_ERROR = "Server Error"
    UNEXPECTED_ERROR = "Unexpected Error"
    INTERNAL_SERVER_ERROR = "Internal server error"
    VALIDATION_ERROR = "Validation Error"
    AUTHENTICATION_FAILED = "Authentication Failed"
    FORBIDDEN_TITLE = "Forbidden"
    RESOURCE_NOT_FOUND_TITLE = "Resource Not Found"
    CONFLICT_TITLE = "Conflict"
    UNEXPECTED_ERROR_OCCURRED = "An unexpected error occurred"
    EMAIL_SEND_FAILED = "Failed to send password reset email. Please try again later."


class AuthErrorMessages:
    AUTHENTICATION_REQUIRED = "Authentication required"
    NO_ACCESS_TOKEN = "No token, authorization denied"
    TOKEN_EXPIRED = "Token has expired"
    TOKEN_EXPIRED_TITLE = "Token Expired"
    TOKEN_INVALID = "Token is not valid"
    INVALID_TOKEN_TITLE = "Invalid Token"
    INVALID_CREDENTIALS = "Incorrect password"
    USER_NOT_FOUND = "User not found"
    SOCKET_AUTHENTICATION_ERROR = "Authentication error"


class PermissionErrors:
    INSUFFICIENT_ROLE = "Access denied: '{0}' requires one of {1}, but user has '{2}'"
    PROJECT_ACCESS_DENIED = "Access denied: You don't have permission to access this project"
    TASK_ACCESS_DENIED = "Access denied: You are not assigned to this task"
    TEAM_ACCESS_DENIED = "Access denied: Only the admin or the team's manager can manage this team"
    TEAM_MEMBER_STATUS_ONLY = "Team members can only update the status of tasks assigned to them"
    MANAGER_HAS_NO_TEAM = "You are not assigned to any team"
    MEMBERS_OUTSIDE_TEAM = "You can only add members from your own team"
    PROTECTED_ACCOUNT = "This account is protected and its role cannot be modified"
    OWN_ROLE = "You cannot change your own role"
    ROLE_OUTSIDE_TEAM = "You can only change roles of users in your team"
    TEAM_CHAT_MANAGER_ONLY = "Only the team manager can create a team chat"
    NOT_CHAT_PARTICIPANT = "You are not a participant in this chat"
    NOT_MESSAGE_SENDER = "You can only delete your own messages"


class NotFoundErrors:
    USER_NOT_FOUND = "User not found"
    NOT_TEAM_MEMBER = "User is not a member of this team"
    MANAGER_NOT_FOUND = "Manager not found"
    TEAM_NOT_FOUND = "Team not found"
    PROJECT_NOT_FOUND = "Project not found"
    TASK_NOT_FOUND = "Task not found"
    COMMENT_NOT_FOUND = "Comment not found"
    ATTACHMENT_NOT_FOUND = "Attachment not found"
    CHAT_NOT_FOUND = "Chat not found"
    MESSAGE_NOT_FOUND = "Message not found"
    NOTIFICATION_NOT_FOUND = "Notification not found"
    CONTACT_NOT_FOUND = "Contact message not found"
    ATTACHMENT_FILE_MISSING = "Attachment file is missing from storage"


class ConflictErrors:
    USER_ALREADY_EXISTS = "User already exists"
    TEAM_NAME_TAKEN = "Team name already exists"
    MANAGER_ALREADY_ASSIGNED = "Manager is already assigned to a team"
    ALREADY_TEAM_MEMBER = "User is already a member of this team"
    USER_IN_OTHER_TEAM = "User already belongs to another team"


# Validation error messages
class ValidationErrors:
    INVALID_OBJECT_ID = "{0} is not a valid ObjectId."
    REQUIRED_FIELD = "{0} is required"
    INVALID_TEAM = "Selected team does not exist"
    INVALID_ROLE = "Invalid role. Only '{0}' and '{1}' roles are allowed"
    INVALID_ROLE_TRANSITION = "Cannot change role from {0} to {1}"
    PASSWORD_TOO_SHORT = "Password must be at least {0} characters long"
    INVALID_RESET_TOKEN = "Password reset token is invalid or has expired"
    EMAIL_REQUIRED = "Email is required"
    NO_FILE_UPLOADED = "No file uploaded"
    FILE_TOO_LARGE = "File size exceeds the {0} MB limit"
    FILE_TYPE_NOT_ALLOWED = "Invalid file type. Allowed types: {0}"
    PAGE_POSITIVE = "Page must be a positive integer"
    LIMIT_POSITIVE = "Limit must be a positive integer"
    CANNOT_REMOVE_TEAM_MANAGER = "The team manager cannot be removed from the team"
    SELF_CHAT = "You cannot start a chat with yourself"


class NotificationMessages:
    TASK_CREATED_SELF_TITLE = "Task Created Successfully"
    TASK_CREATED_SELF = 'You successfully created task "{0}"'
    TASK_CREATED_MANAGER_TITLE = "New Task Created"
    TASK_CREATED_MANAGER = '{0} created a new task "{1}" in project "{2}"'
    TASK_ASSIGNED_TITLE = "Task Assigned to You"
    TASK_ASSIGNED = '{0} assigned you a new task "{1}"'

    TASK_UPDATED_SELF_TITLE = "Task Updated Successfully"
    TASK_UPDATED_SELF = 'You successfully updated task "{0}"'
    TASK_UPDATED_TITLE = "Task Updated"
    TASK_UPDATED_MANAGER = '{0} updated task "{1}"'
    TASK_UPDATED_ASSIGNEE = '{0} updated your assigned task "{1}"'

    TASK_DELETED_SELF_TITLE = "Task Deleted Successfully"
    TASK_DELETED_SELF = 'You successfully deleted task "{0}"'
    TASK_DELETED_TITLE = "Task Deleted"
    TASK_DELETED_MANAGER = '{0} deleted task "{1}"'
    TASK_DELETED_ASSIGNEE = '{0} deleted your assigned task "{1}"'

    TASK_COMPLETED_TITLE = "Task Completed"
    TASK_COMPLETED = '{0} completed task "{1}"'

    PROJECT_CREATED_SELF_TITLE = "Project Created Successfully"
    PROJECT_CREATED_SELF = 'You successfully created project "{0}"'
    PROJECT_CREATED_TITLE = "New Project Created"
    PROJECT_CREATED = '{0} created a new project "{1}"'

    PROJECT_UPDATED_SELF_TITLE = "Project Updated Successfully"
    PROJECT_UPDATED_SELF = 'You successfully updated project "{0}"'
    PROJECT_UPDATED_TITLE = "Project Updated"
    PROJECT_UPDATED = '{0} updated project "{1}"'

    PROJECT_DELETED_SELF_TITLE = "Project Deleted Successfully"
    PROJECT_DELETED_SELF = 'You successfully deleted project "{0}"'
    PROJECT_DELETED_TITLE = "Project Deleted"
    PROJECT_DELETED = '{0} deleted project "{1}"'
    PROJECT_DELETED_BY_MANAGER_TITLE = "Project Deleted by Manager"

    COMMENT_ADDED_TITLE = "New Comment Added"
    COMMENT_ADDED = "{0} added a comment on {1}"
    COMMENT_DELETED_TITLE = "Comment Deleted"
    COMMENT_DELETED = "{0} deleted a comment on {1}"

    ATTACHMENT_ADDED_TITLE = "New Attachment Added"
    ATTACHMENT_ADDED = '{0} uploaded "{1}" to {2}'
    ATTACHMENT_DELETED_TITLE = "Attachment Deleted"
    ATTACHMENT_DELETED = '{0} deleted "{1}" from {2}'

    PROFILE_UPDATED_TITLE = "Profile Updated Successfully"
    PROFILE_UPDATED = "You successfully updated your profile"

    MEMBER_ADDED_TITLE = "Added to Project"
    MEMBER_ADDED = "{0} added you to {1}"
    MEMBER_REMOVED_TITLE = "Removed from Project"
    MEMBER_REMOVED = "{0} removed you from {1}"

    ROLE_CHANGED_TITLE = "Your Role Has Changed"
    ROLE_CHANGED = "{0} changed your role to {1}"

    TEAM_CREATED_TITLE = "Team Created Successfully"
    TEAM_CREATED = 'You successfully created team "{0}"'
    TEAM_MEMBER_JOINED_TITLE = "New Team Member Joined"
    TEAM_MEMBER_JOINED = '{0} joined your team "{1}"'

    NEW_USER_SIGNUP_TITLE = "New User Registration"
    NEW_USER_SIGNUP = "{0} ({1}) has signed up as {2}"

    CONTACT_FORM_SUBMITTED_TITLE = "New Contact Form Submission"
    CONTACT_FORM_SUBMITTED = '{0} ({1}) submitted a contact form with subject: "{2}". Click to view details.'

    NEW_MESSAGE_TITLE = "New message from {0}"

    TASK_SUBJECT = 'task "{0}"'
    PROJECT_SUBJECT = 'project "{0}"'


class EmailMessages:
    PASSWORD_RESET_SUBJECT = "Reset Your Password - TaskPilot"
    PASSWORD_RESET_TEXT = "Reset your TaskPilot password: {0}\nThe link expires in {1} minutes."
    PASSWORD_RESET_SUCCESS_SUBJECT = "Password Reset Successful - TaskPilot"
    PASSWORD_RESET_SUCCESS_TEXT = "Your TaskPilot password was reset. Log in at {0}"
