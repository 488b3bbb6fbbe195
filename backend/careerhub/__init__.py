"""
求职申请追踪核心包
包含记录存储、筛选统计、变更 API 以及 AI 面试准备的异步补全流程
"""
