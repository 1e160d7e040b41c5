from feedback_wall.models.identity import Identity
from feedback_wall.models.profile import Profile
from feedback_wall.models.feedback_page import FeedbackPage
from feedback_wall.models.feedback import Feedback

__all__ = [
    "Identity",
    "Profile",
    "FeedbackPage",
    "Feedback",
]
