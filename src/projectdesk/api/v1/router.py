from fastapi import APIRouter

from src.projectdesk.api.v1 import companies, employees, project_wizard, projects

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(companies.router)
api_router.include_router(employees.router)
# Wizard routes go first so /projects/wizard/... never reaches /projects/{project_id}
api_router.include_router(project_wizard.router)
api_router.include_router(projects.router)
