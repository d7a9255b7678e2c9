from .analysis import AnalysisResult, ExistingSkill, MatchAnalysis, MissingSkill, SkillGap
from .profile import Certification, Education, Experience, JobSummary, ProfileBundle, Project, Skill
from .quest import GeneratedOption, GeneratedQuest, Quest, QuestListing, QuestOption, QuestSubmission

__all__ = [
    "AnalysisResult",
    "Certification",
    "Education",
    "ExistingSkill",
    "Experience",
    "GeneratedOption",
    "GeneratedQuest",
    "JobSummary",
    "MatchAnalysis",
    "MissingSkill",
    "ProfileBundle",
    "Project",
    "Quest",
    "QuestListing",
    "QuestOption",
    "QuestSubmission",
    "Skill",
    "SkillGap",
]
