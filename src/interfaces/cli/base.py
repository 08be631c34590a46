"""CLI共通処理."""

import functools
import logging

from collections.abc import Callable
from typing import Any

import click

from src.infrastructure.exceptions import InfrastructureError


logger = logging.getLogger(__name__)


def with_error_handling(func: Callable[..., Any]) -> Callable[..., Any]:
    """コマンド実行時の例外を ClickException に変換するデコレータ.

    ClickException はそのまま再送出し、終了コード1で終わる。
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except click.ClickException:
            raise
        except InfrastructureError as e:
            logger.error("インフラストラクチャエラー: %s", e)
            raise click.ClickException(str(e)) from e
        except Exception as e:
            logger.exception("コマンドの実行に失敗しました")
            raise click.ClickException(f"予期しないエラー: {e}") from e

    return wrapper
