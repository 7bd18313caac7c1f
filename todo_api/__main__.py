import uvicorn

from todo_api import config


def main():
    uvicorn.run("todo_api.main:app", host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
