"""API routers, one module per resource."""

from server.routes import dashboard, news, patents, projects, publications, team_members, todos, users
from server.routes.research import areas_router, directions_router, features_router

ROUTERS = [
    team_members.router,
    publications.router,
    patents.router,
    projects.router,
    news.router,
    areas_router,
    directions_router,
    features_router,
    todos.router,
    users.router,
    users.auth_router,
    dashboard.router,
]
