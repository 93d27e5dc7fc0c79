"""
gdsplot - GDS版图单元渲染工具

模块结构：
- config/     样式表解析与运行期配置
- models/     数据模型定义（样式/上下文/几何）
- layout/     版图数据源（GDSII读取）
- render/     样式解析/结构预处理/坐标变换/分层绘制
- pipeline/   出图流水线编排
- cli         命令行入口
"""

__version__ = "0.1.0"
