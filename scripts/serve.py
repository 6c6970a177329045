"""

개발 서버 실행 스크립트.

- uvicorn 단일 워커로 app.main:app 을 실행한다.
- HOST / PORT 는 .env 또는 환경 변수(PORT, 기본 5000)에서 읽는다.
- 상태는 프로세스 메모리에만 있으므로 재시작하면 시드 데이터로 돌아간다.

사용 방법
- 가상환경 접속
- (.venv) ~\backend~$ python -m scripts.serve

"""

import uvicorn

from app.core.config import settings


def main() -> None:
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, workers=1, log_config=None)


if __name__ == "__main__":
    main()
