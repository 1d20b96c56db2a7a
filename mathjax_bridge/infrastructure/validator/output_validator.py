"""
输出校验器
引擎遇到内容错误（如 TeX 语法错误）时不会抛出异常，而是把错误节点写进输出，
这里在输出文本中查找错误节点并转换为 ConversionError
"""
import html
from typing import Pattern

from ...domain.errors import ConversionError
from ...utils import regex_patterns as patterns


class OutputParser:
    """输出校验器基类

    只做一次文本扫描，不解析完整的标记结构
    """

    error_node: Pattern[str]

    def validate(self, output: str) -> str:
        """校验输出

        Returns:
            没有错误节点时原样返回输出

        Raises:
            ConversionError: 输出中包含错误节点
        """
        # 1. 查找错误节点
        node = self.error_node.search(output)
        if node is None:
            return output

        # 2. 在节点中提取诊断属性，提取失败时视为合法输出
        attribute = patterns.ERROR_ATTRIBUTE.search(node.group(0))
        if attribute is None:
            return output

        # 3. 抛出引擎的诊断文本
        raise ConversionError(html.unescape(attribute.group(1)))


class HTMLOutputParser(OutputParser):
    """CommonHTML 输出校验器"""

    error_node = patterns.CHTML_ERROR_NODE


class MMLOutputParser(OutputParser):
    """MathML 输出校验器"""

    error_node = patterns.MML_ERROR_NODE


class SVGOutputParser(OutputParser):
    """SVG 输出校验器"""

    error_node = patterns.SVG_ERROR_NODE


HTML_PARSER = HTMLOutputParser()
MML_PARSER = MMLOutputParser()
SVG_PARSER = SVGOutputParser()
