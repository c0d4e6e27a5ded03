"""Interactive message catalogue (English and Japanese).

Only human-facing prompts and status lines are translated. Errors raised as
:class:`~gas.exceptions.GasError` stay in English so they can be searched
for and reported verbatim.
"""

from __future__ import annotations

import enum
from typing import Any, Optional

from gas.models import Language


class Msg(str, enum.Enum):
    ASK_LANGUAGE = "ask_language"
    ENTER_NICKNAME = "enter_nickname"
    ENTER_USERNAME = "enter_username"
    ENTER_TOKEN = "enter_token"
    SELECT_ACCOUNT = "select_account"
    SELECT_ACCOUNT_TO_REMOVE = "select_account_to_remove"
    SELECT_AUTH_METHOD = "select_auth_method"
    AUTH_METHOD_BROWSER = "auth_method_browser"
    AUTH_METHOD_TOKEN = "auth_method_token"
    DEVICE_CODE_INFO = "device_code_info"
    WAITING_FOR_AUTH = "waiting_for_auth"
    AUTH_SUCCESS = "auth_success"
    AUTH_FAILED = "auth_failed"
    SETUP_COMPLETE = "setup_complete"
    SETUP_HINT = "setup_hint"
    ACCOUNT_REGISTERED = "account_registered"
    ACCOUNT_REMOVED = "account_removed"
    RULE_SAVED = "rule_saved"
    LANGUAGE_CHANGED = "language_changed"
    NO_ACCOUNTS = "no_accounts"
    ACCOUNT_NOT_FOUND = "account_not_found"
    NO_COMMAND = "no_command"
    OVERRIDE_ACTIVE = "override_active"
    INVALID_SELECTION = "invalid_selection"


_MESSAGES: dict[Language, dict[Msg, str]] = {
    Language.EN: {
        Msg.ASK_LANGUAGE: "Select Language / 言語を選択してください",
        Msg.ENTER_NICKNAME: "Enter account nickname (e.g. Work)",
        Msg.ENTER_USERNAME: "Enter Git username",
        Msg.ENTER_TOKEN: "Enter Personal Access Token (hidden)",
        Msg.SELECT_ACCOUNT: "Select account to use in '{directory}'",
        Msg.SELECT_ACCOUNT_TO_REMOVE: "Select account to remove",
        Msg.SELECT_AUTH_METHOD: "Select authentication method",
        Msg.AUTH_METHOD_BROWSER: "Browser (Recommended)",
        Msg.AUTH_METHOD_TOKEN: "Manual Input (Personal Access Token)",
        Msg.DEVICE_CODE_INFO: "Copy this code: [{code}] -> Press Enter to open GitHub...",
        Msg.WAITING_FOR_AUTH: "Waiting for authorization in browser...",
        Msg.AUTH_SUCCESS: "Authorization successful! Username: {username}",
        Msg.AUTH_FAILED: "Authorization failed or timed out.",
        Msg.SETUP_COMPLETE: "Successfully configured git credential helper.",
        Msg.SETUP_HINT: "You can now use 'gas' automatically with git commands.",
        Msg.ACCOUNT_REGISTERED: "Account '{nickname}' registered successfully.",
        Msg.ACCOUNT_REMOVED: "Account '{nickname}' removed.",
        Msg.RULE_SAVED: "Rule saved: Directory '{directory}' will use account '{nickname}'.",
        Msg.LANGUAGE_CHANGED: "Language setting changed to English.",
        Msg.NO_ACCOUNTS: "No accounts registered. Please use 'gas add' first.",
        Msg.ACCOUNT_NOT_FOUND: "Account '{nickname}' is not registered.",
        Msg.NO_COMMAND: "No command specified.",
        Msg.OVERRIDE_ACTIVE: "Override active: using account '{nickname}'",
        Msg.INVALID_SELECTION: "Selection must be between 1 and {count}.",
    },
    Language.JA: {
        Msg.ASK_LANGUAGE: "Select Language / 言語を選択してください",
        Msg.ENTER_NICKNAME: "アカウントの登録名を入力してください (例: Work)",
        Msg.ENTER_USERNAME: "GitHubのユーザー名を入力してください",
        Msg.ENTER_TOKEN: "パーソナルアクセストークンを入力してください (入力文字は隠れます)",
        Msg.SELECT_ACCOUNT: "'{directory}' で使用するアカウントを選択してください",
        Msg.SELECT_ACCOUNT_TO_REMOVE: "削除するアカウントを選択してください",
        Msg.SELECT_AUTH_METHOD: "認証方法を選択してください",
        Msg.AUTH_METHOD_BROWSER: "ブラウザ認証 (推奨)",
        Msg.AUTH_METHOD_TOKEN: "手動入力 (パーソナルアクセストークン)",
        Msg.DEVICE_CODE_INFO: "このコードをコピーしてください: [{code}] -> Enterを押すとGitHubを開きます...",
        Msg.WAITING_FOR_AUTH: "ブラウザでの承認を待機しています...",
        Msg.AUTH_SUCCESS: "認証に成功しました！ ユーザー名: {username}",
        Msg.AUTH_FAILED: "認証に失敗したか、タイムアウトしました。",
        Msg.SETUP_COMPLETE: "GitのCredential Helperへの登録が完了しました。",
        Msg.SETUP_HINT: "これでGitコマンド使用時に自動的にgasが動作します。",
        Msg.ACCOUNT_REGISTERED: "アカウント '{nickname}' を登録しました。",
        Msg.ACCOUNT_REMOVED: "アカウント '{nickname}' を削除しました。",
        Msg.RULE_SAVED: "設定保存: ディレクトリ '{directory}' ではアカウント '{nickname}' を使用します。",
        Msg.LANGUAGE_CHANGED: "言語設定を日本語に変更しました。",
        Msg.NO_ACCOUNTS: "アカウントが登録されていません。まずは 'gas add' で登録してください。",
        Msg.ACCOUNT_NOT_FOUND: "アカウント '{nickname}' は登録されていません。",
        Msg.NO_COMMAND: "コマンドが指定されていません。",
        Msg.OVERRIDE_ACTIVE: "一時的な切り替え: アカウント '{nickname}' を使用します",
        Msg.INVALID_SELECTION: "1 から {count} の番号を選択してください。",
    },
}


def t(lang: Optional[Language], key: Msg, **fields: Any) -> str:
    """Return message *key* in *lang*, formatted with *fields*.

    Falls back to English when *lang* is ``None`` or lacks the message.

    Example::

        t(Language.JA, Msg.ACCOUNT_REMOVED, nickname="Work")
    """
    catalogue = _MESSAGES.get(lang or Language.EN, _MESSAGES[Language.EN])
    template = catalogue.get(key) or _MESSAGES[Language.EN][key]
    return template.format(**fields) if fields else template
