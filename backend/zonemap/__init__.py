"""ポリゴン階層サービス（エリア・モニタリングゾーン・サンプルプロット）"""

__version__ = "0.1.0"
