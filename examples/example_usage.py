"""Ví dụ: chạy pipeline dựng bảng chấm công (không qua Flask).

Mục tiêu: minh hoạ Controllers chỉ là lớp mỏng, nghiệp vụ nằm ở AttendanceProcessor.
"""

from config import load_settings

from swipe_attendance.container import build_container

ROWS = [
    {"ID": "E001", "Name": "Alice", "Date": "2025-03-03", "Time": "06:00:10", "Status": "Success"},
    {"ID": "E001", "Name": "Alice", "Date": "2025-03-03", "Time": "10:00:05", "Status": "Success"},
    {"ID": "E001", "Name": "Alice", "Date": "2025-03-03", "Time": "10:29:50", "Status": "Success"},
    {"ID": "E001", "Name": "Alice", "Date": "2025-03-03", "Time": "14:01:00", "Status": "Success"},
    {"ID": "E002", "Name": "Bob", "Date": "2025-03-03", "Time": "22:02:00", "Status": "Success"},
    {"ID": "E002", "Name": "Bob", "Date": "2025-03-04", "Time": "06:10:00", "Status": "Success"},
]


def main():
    container = build_container(settings=load_settings())
    result = container.attendance_processor.process(ROWS)

    print(result.summary_message())
    for record in result.records:
        print(record.date, record.employee_name, record.shift_label, record.status)


if __name__ == "__main__":
    main()
