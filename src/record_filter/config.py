"""配置常量和环境变量加载"""

import os

# 记录配置
RECORD_ID_FIELD = os.getenv("RECORD_FILTER_ID_FIELD", "id")  # 批量求值时查找 prior 的主键字段

# 模糊匹配配置
FUZZY_MATCH_THRESHOLD = float(os.getenv("RECORD_FILTER_FUZZY_THRESHOLD", "0.8"))
