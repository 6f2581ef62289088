"""
User-facing messages shown by the dashboard (Bengali).

Machine consumers should rely on the ``success`` flag, the HTTP status and the
``code`` field of error envelopes, never on this text.
"""

# Results
RESULT_NOT_FOUND = "ফলাফল পাওয়া যায়নি"
RESULT_REQUIRED_FIELDS = "শিক্ষার্থী, পরীক্ষা এবং গ্রেড প্রয়োজন"
RESULT_DUPLICATE = "এই শিক্ষার্থীর এই পরীক্ষার ফলাফল ইতিমধ্যে যুক্ত করা হয়েছে"
RESULT_CREATED = "ফলাফল সফলভাবে যুক্ত হয়েছে"
RESULT_UPDATED = "ফলাফল সফলভাবে আপডেট হয়েছে"
RESULT_DELETED = "ফলাফল সফলভাবে মুছে ফেলা হয়েছে"
FIELD_REQUIRED = "এই তথ্যটি খালি রাখা যাবে না"
INVALID_SORT_FIELD = "অবৈধ সাজানোর ক্ষেত্র"

# Students
STUDENT_NOT_FOUND = "শিক্ষার্থী পাওয়া যায়নি"
STUDENT_CREATED = "শিক্ষার্থী সফলভাবে যুক্ত হয়েছে"
STUDENT_UPDATED = "শিক্ষার্থীর তথ্য সফলভাবে আপডেট হয়েছে"
STUDENT_DELETED = "শিক্ষার্থী সফলভাবে মুছে ফেলা হয়েছে"

# Generic
INVALID_INPUT = "প্রদত্ত তথ্য সঠিক নয়"
SERVER_ERROR = "সার্ভারে একটি সমস্যা হয়েছে"
STORE_FAILURE = "ডাটাবেসে তথ্য সংরক্ষণ করা যায়নি"
