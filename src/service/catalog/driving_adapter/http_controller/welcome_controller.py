from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from src.platform.config.core_setting import settings


router = APIRouter()

WELCOME_PAGE = """<!doctype html>
<html lang="it">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Benvenuto - {project_name}</title>
</head>
<body>
  <main>
    <h1>Benvenuto in {project_name}</h1>
    <p>Questa è la pagina di benvenuto del server.</p>
  </main>
</body>
</html>"""


@router.get('/', response_class=HTMLResponse, include_in_schema=False)
@router.get('/welcome', response_class=HTMLResponse, include_in_schema=False)
async def welcome() -> HTMLResponse:
    return HTMLResponse(content=WELCOME_PAGE.format(project_name=settings.PROJECT_NAME))
