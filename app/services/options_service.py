"""选项服务：把各个枚举表整理成前端下拉框可直接使用的选项列表。"""

from app.core.constants import HTTP_STATUS_OK
from app.core.enums import ENUM_TABLES, enum_options
from app.core.exceptions import NotFoundError
from app.core.responses import create_response


class OptionsService:
    def list_all(self) -> dict:
        data = {name: enum_options(name) for name in ENUM_TABLES}
        return create_response("获取选项成功", data, HTTP_STATUS_OK)

    def list_by_name(self, name: str) -> dict:
        if name not in ENUM_TABLES:
            raise NotFoundError("选项表不存在")
        return create_response("获取选项成功", enum_options(name), HTTP_STATUS_OK)


options_service = OptionsService()
