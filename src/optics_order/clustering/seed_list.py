"""
OPTICS种子列表
按优先级（可达距离）排序的点索引容器
"""

from typing import Iterator, List, Optional, Sequence, Tuple


class SeedList:
    """按优先级排序的种子列表"""

    SORTING_ORDERS = ('asc', 'desc')

    def __init__(self, elements: Optional[Sequence[int]] = None,
                 priorities: Optional[Sequence[float]] = None,
                 *, sorting: str):
        """
        初始化种子列表

        Args:
            elements: 初始元素（点索引）
            priorities: 与elements一一对应的优先级
            sorting: 排序方向，'asc'为升序，'desc'为降序（必须以关键字传入）

        Example:
            elements: [1, 2, 3, 4]
            priorities: [4, 1, 2, 3]
            sorting: 'desc' -> [1, 4, 3, 2]
        """
        if sorting not in self.SORTING_ORDERS:
            raise ValueError(f"不支持的排序方向: {sorting}")

        self._sorting = sorting
        self._queue: List[int] = []
        self._priorities: List[float] = []

        if elements is not None or priorities is not None:
            elements = list(elements) if elements is not None else []
            priorities = list(priorities) if priorities is not None else []

            if len(elements) != len(priorities):
                raise ValueError("elements和priorities的长度必须相同")

            for element, priority in zip(elements, priorities):
                self.insert(element, priority)

    @property
    def sorting(self) -> str:
        return self._sorting

    def insert(self, element: int, priority: float) -> None:
        """
        按优先级插入元素

        从尾部向头部扫描，新优先级严格优于已有元素时，将插入位置前移到该元素处。
        优先级相同的元素保持插入顺序（新元素排在后面）。

        Args:
            element: 元素
            priority: 优先级
        """
        index_to_insert = len(self._queue)

        for index in range(len(self._queue) - 1, -1, -1):
            if self._is_better(priority, self._priorities[index]):
                index_to_insert = index

        self._queue.insert(index_to_insert, element)
        self._priorities.insert(index_to_insert, priority)

    def remove(self, element: int) -> None:
        """
        删除元素的第一次出现，元素不存在时不做任何处理

        Args:
            element: 要删除的元素
        """
        for index, existing in enumerate(self._queue):
            if existing == element:
                del self._queue[index]
                del self._priorities[index]
                break

    def get_elements(self) -> List[int]:
        """返回内部元素列表（非副本，后续插入/删除会反映在其中）"""
        return self._queue

    def get_element_priority(self, index: int) -> float:
        return self._priorities[index]

    def get_priorities(self) -> List[float]:
        return self._priorities

    def get_elements_with_priorities(self) -> List[Tuple[int, float]]:
        """
        获取元素及其优先级

        Returns:
            (元素, 优先级)元组列表，按当前排序
        """
        return list(zip(self._queue, self._priorities))

    def _is_better(self, priority: float, other: float) -> bool:
        if self._sorting == 'desc':
            return priority > other
        return priority < other

    def __len__(self) -> int:
        return len(self._queue)

    def __iter__(self) -> Iterator[int]:
        return iter(self._queue)

    def __contains__(self, element: int) -> bool:
        return element in self._queue

    def __repr__(self) -> str:
        return f"SeedList({self.get_elements_with_priorities()!r}, sorting={self._sorting!r})"
