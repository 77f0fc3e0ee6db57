from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from homeprojects.config import Settings
# モデル定義側の Base を利用してメタデータを統一
from homeprojects.models.base import Base


class Database:
    """Engine + session factory for one application instance."""

    def __init__(self, settings: Settings):
        self.settings = settings
        # SQLite はスレッドプールから使うため check_same_thread を外す
        connect_args = {"check_same_thread": False} if settings.is_sqlite else {}
        self.engine = create_engine(settings.database_url, connect_args=connect_args)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def init(self) -> None:
        # データディレクトリ作成（存在しない場合）。失敗時は起動を中断する
        self.settings.data_dir.mkdir(parents=True, exist_ok=True)
        self.settings.uploads_dir.mkdir(parents=True, exist_ok=True)

        # 各モデルモジュールを明示 import してメタデータ登録を確実化
        import homeprojects.models.checklist  # noqa: F401
        import homeprojects.models.note  # noqa: F401
        import homeprojects.models.status  # noqa: F401
        import homeprojects.models.photo  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Iterator[Session]:
        db: Session = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
