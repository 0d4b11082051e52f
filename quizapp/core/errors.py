"""
도메인 예외. 코어는 예외를 던지기만 하고, HTTP 상태 코드 변환은 API 계층에서 한다.
"""


class QuizAppError(Exception):
    """모든 도메인 예외의 기반 클래스."""


class EnrichmentError(QuizAppError):
    """퀴즈 생성(문항 수집·보강) 단계 실패."""


class SourceUnavailable(EnrichmentError):
    """외부 API 네트워크 오류, 타임아웃, 비정상 응답 코드."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class SourceDataError(EnrichmentError):
    """외부 API 응답이 깨졌거나 비어 있음."""


class PartialEnrichmentError(EnrichmentError):
    """strict 정책에서 일부 문항 보강이 실패함."""

    def __init__(self, failures: list[tuple[int, Exception]]):
        self.failures = failures
        super().__init__(f"encountered {len(failures)} enrichment errors")


class NotFound(QuizAppError):
    pass


class EmptyQuiz(QuizAppError):
    """문항이 0개인 퀴즈는 채점할 수 없음."""


class PersistenceError(QuizAppError):
    """트랜잭션/쓰기 실패 (롤백 후 전달)."""


class DuplicateUser(QuizAppError):
    pass


class InvalidCredentials(QuizAppError):
    pass
