import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from pathlib import Path


def _get_connect_args(database_url: str):
    """根据数据库类型返回连接参数"""
    if "postgresql" in database_url:
        return {
            "connect_timeout": 2,
            "application_name": "channel_sync",
        }
    if database_url.startswith("sqlite"):
        # Sync endpoints run in a worker pool
        return {"check_same_thread": False}
    return {}


def _get_pool_config(database_url: str):
    """根据环境返回连接池配置"""
    if database_url.startswith("sqlite"):
        return {"echo": False}
    if "localhost" in database_url or "127.0.0.1" in database_url:
        return {
            "pool_size": 2,
            "max_overflow": 0,
            "pool_timeout": 1,
            "pool_pre_ping": True,
            "pool_recycle": 180,
            "echo": False,
        }
    return {
        "pool_size": 10,
        "max_overflow": 5,
        "pool_timeout": 5,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
        "echo": False,
    }


def _ensure_sqlite_dir(database_url: str) -> None:
    prefix = "sqlite:///"
    if not database_url.startswith(prefix) or database_url == "sqlite:///:memory:":
        return
    try:
        Path(database_url[len(prefix):]).parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logging.getLogger("channelsync.models.base").warning("sqlite data dir not created: %s", exc)


def make_engine(database_url: str):
    _ensure_sqlite_dir(database_url)
    return create_engine(
        database_url,
        future=True,
        connect_args=_get_connect_args(database_url),
        **_get_pool_config(database_url),
    )


def make_session_factory(bind):
    return sessionmaker(autocommit=False, autoflush=False, bind=bind, future=True)


Base = declarative_base()
