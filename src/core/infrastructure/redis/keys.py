"""Redis Key 命名规范。

Redis 用于：
- Token 注册表：记录仍然有效（未撤销）的 token
"""


class RedisKeys:
    """Redis Key 命名空间管理。"""

    # Token 注册表
    # USER:{user_id}_JWT:{jti}
    USER_PREFIX = "USER"
    TOKEN_SEGMENT = "JWT"

    @classmethod
    def user_token(cls, user_id: str, token_id: str) -> str:
        """生成 token 注册表 key。

        Args:
            user_id: 用户 ID
            token_id: token 的 jti

        Returns:
            格式化的 Redis key
        """
        return f"{cls.USER_PREFIX}:{user_id}_{cls.TOKEN_SEGMENT}:{token_id}"

    @classmethod
    def user_token_pattern(cls, user_id: str) -> str:
        """生成匹配某用户全部 token 的 SCAN 模式。"""
        return f"{cls.USER_PREFIX}:{user_id}_{cls.TOKEN_SEGMENT}:*"
