import uvicorn

from kanaquiz.app import create_app
from kanaquiz.config import settings

app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)
