"""Domain models for the research group website."""

from labsite.models.team_member import (
    TeamMember, TeamMemberCreate, TeamMemberPatch, MemberCategory, CATEGORY_RANK,
)
from labsite.models.publication import Publication, PublicationCreate, PublicationPatch
from labsite.models.patent import (
    Patent, PatentCreate, PatentPatch, PatentStatus, PatentType,
)
from labsite.models.project import Project, ProjectCreate, ProjectPatch
from labsite.models.news import News, NewsCreate, NewsPatch
from labsite.models.todo import TodoItem, TodoCreate, TodoPatch, TodoPriority
from labsite.models.user import User, UserCreate, UserPatch, UserRole, LoginRequest
from labsite.models.research import (
    OrderedItem, OrderedItemCreate, OrderedItemPatch,
    ResearchArea, ResearchAreaCreate, ResearchAreaPatch,
    ResearchDirection, ResearchDirectionCreate,
    ResearchFeature, ResearchFeatureCreate,
)

__all__ = [
    "TeamMember", "TeamMemberCreate", "TeamMemberPatch", "MemberCategory", "CATEGORY_RANK",
    "Publication", "PublicationCreate", "PublicationPatch",
    "Patent", "PatentCreate", "PatentPatch", "PatentStatus", "PatentType",
    "Project", "ProjectCreate", "ProjectPatch",
    "News", "NewsCreate", "NewsPatch",
    "TodoItem", "TodoCreate", "TodoPatch", "TodoPriority",
    "User", "UserCreate", "UserPatch", "UserRole", "LoginRequest",
    "OrderedItem", "OrderedItemCreate", "OrderedItemPatch",
    "ResearchArea", "ResearchAreaCreate", "ResearchAreaPatch",
    "ResearchDirection", "ResearchDirectionCreate",
    "ResearchFeature", "ResearchFeatureCreate",
]
